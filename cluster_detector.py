"""
Coordinated Spam Campaign Detection.

Version: 1.0.0

Bot networks post the same promotional message many times, each copy slightly
disguised (fancy fonts, leet-speak, a changed number). Looking at comments one
at a time misses them; looking at the batch as a whole does not.

Pipeline:
    1. Normalize every comment into a canonical word sequence
    2. Pass 1: greedy clustering by hybrid similarity (edit distance + trigrams)
    3. Pass 2: merge clusters whose representatives are still loosely similar
    4. Extract a template and score each cluster from its signals
    5. Emit clusters scoring at or above the campaign threshold

Usage:
    detector = ClusterDetector()
    result = detector.analyze_batch([
        {"id": "1", "text": "Slot gacor hari ini maxwin!", "author": "a"},
        {"id": "2", "text": "SL0T GΔCOR hari ini maxwin!", "author": "b"},
    ])

    for campaign in result.spam_campaigns:
        print(f"{campaign.score}: {campaign.template}")
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Iterable, List, Mapping, Optional, Set

from campaign_core.config import DEFAULT_CONFIG, DetectionConfig
from campaign_core.constants import MAX_SCORE
from campaign_core.models import (
    BatchResult,
    BatchSummary,
    CampaignScore,
    Cluster,
    Comment,
    NormalizedComment,
    VideoContext,
)
from campaign_core.validators import CommentValidator, ContextValidator
from contextual_analyzer import ContextualAnalyzer
from fuzzy_matcher import FuzzyMatcher
from pattern_analyzer import PatternAnalyzer
from unicode_analyzer import UnicodeAnalyzer

logger = logging.getLogger(__name__)


# =============================================================================
# SIMILARITY HELPERS
# =============================================================================

def character_ngrams(text: str, n: int = 3) -> Set[str]:
    """Set of character n-grams; a text shorter than ``n`` is its own gram."""
    if not text:
        return set()
    if len(text) < n:
        return {text}
    return {text[i:i + n] for i in range(len(text) - n + 1)}


def jaccard_similarity(a: Set[str], b: Set[str]) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def author_diversity(members: List[NormalizedComment]) -> float:
    """Unique authors divided by members (0.0 when empty)."""
    if not members:
        return 0.0
    return len({member.author for member in members}) / len(members)


# =============================================================================
# CLUSTER DETECTOR
# =============================================================================

class ClusterDetector:
    """
    Groups near-duplicate comments and scores each group as a possible campaign.

    The detector is stateless between batches; every call to
    ``analyze_batch`` works only on the comments it is given.
    """

    _NON_ALNUM_CHARS = re.compile(r'[^\w]|_')
    _DIGIT_RUN = re.compile(r'\d+')

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        unicode_analyzer: Optional[UnicodeAnalyzer] = None,
        fuzzy_matcher: Optional[FuzzyMatcher] = None,
        pattern_analyzer: Optional[PatternAnalyzer] = None,
        contextual_analyzer: Optional[ContextualAnalyzer] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.unicode_analyzer = unicode_analyzer or UnicodeAnalyzer(self.config)
        self.fuzzy_matcher = fuzzy_matcher or FuzzyMatcher(self.config)
        self.pattern_analyzer = pattern_analyzer or PatternAnalyzer(self.config)
        self.contextual_analyzer = contextual_analyzer or ContextualAnalyzer(self.config)

        amount_words = '|'.join(re.escape(word) for word in self.config.amount_words)
        self._amount_pattern = re.compile(rf'\b(?:{amount_words})\b') if amount_words else None

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def analyze_batch(
        self,
        comments: Optional[Iterable[Any]],
        channel_context: Optional[Mapping[str, Any]] = None,
        video_context: Optional[Mapping[str, Any]] = None,
    ) -> BatchResult:
        """
        Detect spam campaigns in a batch of comments.

        Args:
            comments: ``Comment`` objects or dicts with ``id``, ``text``, ``author``
            channel_context: Optional channel metadata (name, description, category, tags)
            video_context: Optional video metadata (title, description, category, tags)

        Returns:
            BatchResult with every cluster, the emitted campaigns and a summary
        """
        comments = list(comments or [])
        if not comments:
            return BatchResult.empty()

        started = time.perf_counter()
        context = ContextValidator.build_context(channel_context, video_context)

        normalized = self.normalize_comments(comments)
        clusters = self.merge_clusters(self.find_clusters(normalized))

        campaigns = []
        for cluster in clusters:
            campaign = self.score_cluster(cluster, context)
            if campaign.score >= self.config.campaign_threshold:
                campaigns.append(campaign)

        summary = BatchSummary(
            total_comments=len(comments),
            clusters_found=len(clusters),
            spam_campaigns=len(campaigns),
            affected_comments=sum(campaign.member_count for campaign in campaigns),
        )

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"Analyzed {len(comments)} comments in {elapsed_ms:.1f}ms: "
            f"{len(clusters)} clusters, {len(campaigns)} campaigns"
        )
        if campaigns:
            logger.info(
                f"Detected {len(campaigns)} spam campaign(s) covering "
                f"{summary.affected_comments}/{len(comments)} comments"
            )

        return BatchResult(clusters=clusters, spam_campaigns=campaigns, summary=summary)

    # -------------------------------------------------------------------------
    # Step 1: normalization
    # -------------------------------------------------------------------------

    def normalize_text(self, text: str) -> str:
        """
        Canonical word sequence of a comment.

        Fancy fonts are collapsed first, then each word loses its punctuation
        and is fuzzy-normalized on its own so word boundaries survive.
        """
        if not text:
            return ""

        words = []
        for word in self.unicode_analyzer.normalize(text).split():
            cleaned = self._NON_ALNUM_CHARS.sub('', word)
            cleaned = self.fuzzy_matcher.normalize(cleaned)
            if cleaned:
                words.append(cleaned)
        return ' '.join(words).lower().strip()

    def normalize_comment(self, comment: Comment, index: int) -> NormalizedComment:
        return NormalizedComment(
            id=comment.id,
            original_text=comment.text,
            normalized_text=self.normalize_text(comment.text),
            author=comment.author,
            index=index,
        )

    def normalize_comments(self, comments: Iterable[Any]) -> List[NormalizedComment]:
        """Validate and normalize a batch; unusable comments are skipped."""
        normalized = []
        for index, comment in CommentValidator.parse_batch(comments):
            item = self.normalize_comment(comment, index)
            if item.normalized_text:
                normalized.append(item)
            else:
                logger.debug(f"Comment {comment.id} has no text left after normalization")
        return normalized

    # -------------------------------------------------------------------------
    # Step 2 & 3: clustering
    # -------------------------------------------------------------------------

    def hybrid_similarity(self, a: str, b: str) -> float:
        """
        Edit-distance similarity plus a trigram Jaccard bonus, capped at 1.0.

        The trigram bonus catches reordered or partially rewritten copies that
        edit distance alone scores low.
        """
        if a == b:
            return 1.0

        max_len = max(len(a), len(b))
        if max_len == 0:
            return 1.0

        distance = self.fuzzy_matcher.edit_distance(a, b)
        levenshtein_similarity = 1 - distance / max_len

        n = self.config.ngram_size
        ngram_similarity = jaccard_similarity(character_ngrams(a, n), character_ngrams(b, n))

        return min(1.0, levenshtein_similarity + self.config.ngram_bonus_weight * ngram_similarity)

    def find_clusters(self, normalized: List[NormalizedComment]) -> List[Cluster]:
        """
        Pass 1: greedy first-seen clustering.

        Each unassigned comment seeds a cluster and pulls in every later
        unassigned comment similar to it. Seeds that attract nobody are dropped.
        """
        threshold = self.config.pass1_threshold
        assigned = [False] * len(normalized)
        clusters = []

        for i, seed in enumerate(normalized):
            if assigned[i]:
                continue

            cluster = Cluster()
            cluster.add(seed)
            assigned[i] = True

            for j in range(i + 1, len(normalized)):
                if assigned[j]:
                    continue
                candidate = normalized[j]
                if self.hybrid_similarity(seed.normalized_text, candidate.normalized_text) >= threshold:
                    cluster.add(candidate)
                    assigned[j] = True

            if cluster.size >= self.config.min_cluster_size:
                clusters.append(cluster)

        return clusters

    def merge_clusters(self, clusters: List[Cluster]) -> List[Cluster]:
        """
        Pass 2: merge clusters whose first members are loosely similar.

        A later cluster is folded into the earlier one and never compared
        again. Merges do not chain: if B joins A, a cluster C that only
        resembles B's representative is not pulled in through B.
        """
        threshold = self.config.merge_threshold
        consumed = [False] * len(clusters)
        merged = []

        for i, cluster in enumerate(clusters):
            if consumed[i]:
                continue

            representative = cluster.first.normalized_text
            for j in range(i + 1, len(clusters)):
                if consumed[j]:
                    continue
                other = clusters[j]
                if self.hybrid_similarity(representative, other.first.normalized_text) >= threshold:
                    cluster.absorb(other)
                    consumed[j] = True

            merged.append(cluster)

        if len(merged) < len(clusters):
            logger.debug(f"Merged {len(clusters)} clusters into {len(merged)}")

        return merged

    # -------------------------------------------------------------------------
    # Step 4: templates
    # -------------------------------------------------------------------------

    def extract_template(self, members: List[NormalizedComment]) -> str:
        """First member's text with numbers and amount words replaced by placeholders."""
        if not members:
            return ""

        template = self._DIGIT_RUN.sub(self.config.number_placeholder, members[0].normalized_text)
        if self._amount_pattern is not None:
            template = self._amount_pattern.sub(self.config.amount_placeholder, template)
        return template

    def template_specificity(self, template: str) -> int:
        """Fewer placeholders means a more specific (more suspicious) template."""
        if not template.strip():
            return 0

        placeholders = (
            template.count(self.config.number_placeholder)
            + template.count(self.config.amount_placeholder)
        )
        return max(0, self.config.specificity_base - self.config.specificity_penalty * placeholders)

    # -------------------------------------------------------------------------
    # Step 5: scoring
    # -------------------------------------------------------------------------

    def size_score(self, member_count: int) -> int:
        for min_size, points in self.config.size_score_bands:
            if member_count >= min_size:
                return points
        return 0

    def score_cluster(self, cluster: Cluster, context: Optional[VideoContext] = None) -> CampaignScore:
        """
        Score a cluster from 0 to 100.

        The legitimacy reduction comes off the raw signal sum; the result is
        clamped to 0-100 last.

        Args:
            cluster: Cluster to score
            context: Merged channel/video metadata; contextual reductions only
                apply when it is given

        Returns:
            CampaignScore with the score and the signals that produced it
        """
        cfg = self.config
        members = cluster.members
        member_count = len(members)
        representative = members[0]
        signals = []

        size_points = self.size_score(member_count)
        score = size_points
        signals.append(f"Cluster size: {member_count} comments (+{size_points})")

        template = self.extract_template(members)
        specificity = self.template_specificity(template)
        score += specificity
        signals.append(f"Template specificity: {specificity}/{cfg.specificity_base}")

        patterns = self.pattern_analyzer.analyze(
            representative.original_text, representative.normalized_text
        )
        if patterns.has_money:
            score += cfg.money_points
            signals.append(f"Money mentions (+{cfg.money_points})")
        if patterns.has_urgency:
            score += cfg.urgency_points
            signals.append(f"Urgency language (+{cfg.urgency_points})")
        if patterns.has_link_promotion:
            score += cfg.link_points
            signals.append(f"Link promotion (+{cfg.link_points})")
        if patterns.emoji_density > cfg.emoji_density_threshold:
            score += cfg.emoji_points
            signals.append(f"High emoji density (+{cfg.emoji_points})")
        if patterns.caps_ratio > cfg.caps_ratio_threshold:
            score += cfg.caps_points
            signals.append(f"Excessive caps (+{cfg.caps_points})")

        diversity = author_diversity(members)
        if diversity < cfg.low_diversity_threshold:
            score += cfg.low_diversity_bonus
            signals.append(f"Low author diversity (likely bot) (+{cfg.low_diversity_bonus})")
        elif diversity > cfg.high_diversity_threshold and member_count >= cfg.high_diversity_min_members:
            score += cfg.high_diversity_bonus
            signals.append(f"Many distinct authors posting one template (+{cfg.high_diversity_bonus})")

        if any(self.unicode_analyzer.has_fancy(member.original_text) for member in members):
            score += cfg.unicode_bonus
            signals.append(f"Unicode fancy fonts detected (+{cfg.unicode_bonus})")

        if context is not None:
            assessment = self.contextual_analyzer.assess_legitimacy(
                representative.original_text, context, patterns.has_spam_keywords
            )
            if assessment is not None:
                score -= assessment.reduction
                signals.append(f"Legitimate context: {assessment.reason} (-{assessment.reduction})")

        score = min(MAX_SCORE, max(0, score))

        authors = []
        for member in members:
            if member.author not in authors:
                authors.append(member.author)

        return CampaignScore(
            score=score,
            member_count=member_count,
            template=template,
            signals=tuple(signals),
            comment_ids=tuple(member.id for member in members),
            authors=tuple(authors),
            author_diversity=round(diversity, 2),
            sample_text=representative.original_text,
        )
