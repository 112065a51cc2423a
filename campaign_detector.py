"""
Campaign detection entry point.

Thin facade over ``ClusterDetector`` that adds human-readable reports with a
severity level per campaign, plus module-level convenience functions backed
by a lazily created default detector.

Usage:
    detector = CampaignDetector()
    report = detector.generate_report(comments)

    for campaign in report.campaigns:
        print(f"[{campaign.severity.value}] {campaign.pattern} x{campaign.comment_count}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from campaign_core.config import DetectionConfig
from campaign_core.constants import Severity
from campaign_core.models import BatchResult, BatchSummary, CampaignScore
from cluster_detector import ClusterDetector

logger = logging.getLogger(__name__)


# =============================================================================
# REPORT DATA CLASSES
# =============================================================================

@dataclass
class CampaignReportEntry:
    """One campaign, formatted for moderators."""
    severity: Severity
    confidence: str
    pattern: str
    comment_count: int
    authors: List[str]
    sample: str
    reasons: List[str]

    @classmethod
    def from_score(cls, campaign: CampaignScore) -> CampaignReportEntry:
        return cls(
            severity=Severity.from_score(campaign.score),
            confidence=f"{campaign.score}%",
            pattern=campaign.template,
            comment_count=campaign.member_count,
            authors=list(campaign.authors),
            sample=campaign.sample_text,
            reasons=list(campaign.signals),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "confidence": self.confidence,
            "pattern": self.pattern,
            "comment_count": self.comment_count,
            "authors": list(self.authors),
            "sample": self.sample,
            "reasons": list(self.reasons),
        }


@dataclass
class CampaignReport:
    """Batch summary plus one entry per detected campaign."""
    summary: BatchSummary
    campaigns: List[CampaignReportEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "campaigns": [campaign.to_dict() for campaign in self.campaigns],
        }


# =============================================================================
# FACADE
# =============================================================================

class CampaignDetector:
    """
    Detects coordinated comment campaigns.

    Usage:
        detector = CampaignDetector()
        if detector.has_campaign(comments):
            report = detector.generate_report(comments)
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        cluster_detector: Optional[ClusterDetector] = None,
    ):
        self.cluster_detector = cluster_detector or ClusterDetector(config)
        self.config = self.cluster_detector.config

    def analyze_batch(
        self,
        comments: Optional[Iterable[Any]],
        channel_context: Optional[Mapping[str, Any]] = None,
        video_context: Optional[Mapping[str, Any]] = None,
    ) -> BatchResult:
        """Run full campaign detection on a batch of comments."""
        return self.cluster_detector.analyze_batch(comments, channel_context, video_context)

    def generate_report(
        self,
        comments: Optional[Iterable[Any]],
        channel_context: Optional[Mapping[str, Any]] = None,
        video_context: Optional[Mapping[str, Any]] = None,
    ) -> CampaignReport:
        """
        Analyze a batch and format the campaigns for moderators.

        Severity: >= 90 CRITICAL, >= 80 HIGH, >= 70 MEDIUM, otherwise LOW.
        """
        result = self.analyze_batch(comments, channel_context, video_context)
        return CampaignReport(
            summary=result.summary,
            campaigns=[CampaignReportEntry.from_score(c) for c in result.spam_campaigns],
        )

    def has_campaign(
        self,
        comments: Optional[Iterable[Any]],
        channel_context: Optional[Mapping[str, Any]] = None,
        video_context: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Quick check whether a batch contains at least one campaign."""
        return self.analyze_batch(comments, channel_context, video_context).has_campaign


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_default_detector: Optional[CampaignDetector] = None


def get_default_detector() -> CampaignDetector:
    """Get or create the default detector instance."""
    global _default_detector
    if _default_detector is None:
        _default_detector = CampaignDetector()
    return _default_detector


def analyze_batch(
    comments: Optional[Iterable[Any]],
    channel_context: Optional[Mapping[str, Any]] = None,
    video_context: Optional[Mapping[str, Any]] = None,
) -> BatchResult:
    """
    Detect spam campaigns with the default configuration.

    Args:
        comments: Comment dicts (``id``, ``text``, ``author``) or ``Comment`` objects
        channel_context: Optional channel metadata
        video_context: Optional video metadata

    Returns:
        BatchResult with clusters, campaigns and summary
    """
    return get_default_detector().analyze_batch(comments, channel_context, video_context)


def generate_report(
    comments: Optional[Iterable[Any]],
    channel_context: Optional[Mapping[str, Any]] = None,
    video_context: Optional[Mapping[str, Any]] = None,
) -> CampaignReport:
    """Human-readable campaign report with the default configuration."""
    return get_default_detector().generate_report(comments, channel_context, video_context)


def has_campaign(
    comments: Optional[Iterable[Any]],
    channel_context: Optional[Mapping[str, Any]] = None,
    video_context: Optional[Mapping[str, Any]] = None,
) -> bool:
    """True if the batch contains at least one spam campaign."""
    return get_default_detector().has_campaign(comments, channel_context, video_context)
