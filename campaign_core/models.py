"""
Data classes shared by the detection engine.

Result objects follow one convention: plain dataclasses with a ``to_dict``
method producing JSON-serializable output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class Comment:
    """A single comment as received from the caller."""
    id: str
    text: str
    author: str = "Unknown"

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "text": self.text, "author": self.author}


@dataclass(frozen=True)
class NormalizedComment:
    """A comment together with its canonical text form."""
    id: str
    original_text: str
    normalized_text: str
    author: str
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "original": self.original_text,
            "normalized": self.normalized_text,
            "author": self.author,
            "index": self.index,
        }


@dataclass
class Cluster:
    """
    A group of structurally similar comments.

    ``indices`` are positions in the input batch, parallel to ``members``.
    The first member is the cluster's representative.
    """
    members: List[NormalizedComment] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)

    @property
    def first(self) -> NormalizedComment:
        return self.members[0]

    @property
    def size(self) -> int:
        return len(self.members)

    def add(self, member: NormalizedComment) -> None:
        self.members.append(member)
        self.indices.append(member.index)

    def absorb(self, other: Cluster) -> None:
        """Append every member of ``other`` to this cluster."""
        self.members.extend(other.members)
        self.indices.extend(other.indices)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "members": [member.to_dict() for member in self.members],
            "indices": list(self.indices),
        }


@dataclass(frozen=True)
class CampaignScore:
    """Score and evidence for one cluster."""
    score: int
    member_count: int
    template: str
    signals: Tuple[str, ...]
    comment_ids: Tuple[str, ...]
    authors: Tuple[str, ...]
    author_diversity: float
    sample_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "member_count": self.member_count,
            "template": self.template,
            "signals": list(self.signals),
            "comment_ids": list(self.comment_ids),
            "authors": list(self.authors),
            "author_diversity": self.author_diversity,
            "sample_text": self.sample_text,
        }


@dataclass(frozen=True)
class VideoContext:
    """Merged channel/video metadata used for topic relevance."""
    title: str = ""
    description: str = ""
    category: str = ""
    tags: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.description or self.category or self.tags)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class BatchSummary:
    """Counts describing one analyzed batch."""
    total_comments: int = 0
    clusters_found: int = 0
    spam_campaigns: int = 0
    affected_comments: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_comments": self.total_comments,
            "clusters_found": self.clusters_found,
            "spam_campaigns": self.spam_campaigns,
            "affected_comments": self.affected_comments,
        }


@dataclass
class BatchResult:
    """Clusters, emitted campaigns and summary for one batch."""
    clusters: List[Cluster] = field(default_factory=list)
    spam_campaigns: List[CampaignScore] = field(default_factory=list)
    summary: BatchSummary = field(default_factory=BatchSummary)

    @classmethod
    def empty(cls, total_comments: int = 0) -> BatchResult:
        return cls(summary=BatchSummary(total_comments=total_comments))

    @property
    def has_campaign(self) -> bool:
        return bool(self.spam_campaigns)

    def flagged_ids(self) -> List[str]:
        """Ids of every comment that belongs to an emitted campaign."""
        ids: List[str] = []
        for campaign in self.spam_campaigns:
            ids.extend(campaign.comment_ids)
        return ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            "clusters": [cluster.to_dict() for cluster in self.clusters],
            "spam_campaigns": [campaign.to_dict() for campaign in self.spam_campaigns],
            "summary": self.summary.to_dict(),
        }
