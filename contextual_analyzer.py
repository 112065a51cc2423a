"""
Contextual false-positive suppression.

Keyword signals alone flag too much: a comment explaining how online gambling
scams work mentions the same words as the scam itself. This module looks at
what a comment is doing (teaching, asking, warning, promoting) and, when the
channel/video metadata is known, whether the comment simply talks about the
video's topic.

Usage:
    analyzer = ContextualAnalyzer()
    result = analyzer.analyze_context("Bagaimana cara kerja judi online?", 70)
    result.adjusted_score   # 40
    result.context          # "educational"
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from campaign_core.config import DEFAULT_CONFIG, DetectionConfig
from campaign_core.constants import MAX_SCORE, ContextLabel, LegitimacyCategory, Sentiment
from campaign_core.keywords import contains_keyword, count_keywords
from campaign_core.models import VideoContext

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class ContextResult:
    """Result of contextual score adjustment."""
    adjusted_score: int
    context: ContextLabel = ContextLabel.UNKNOWN
    is_legitimate: bool = False
    score_adjustment: int = 0
    sentiment: Sentiment = Sentiment.NEUTRAL
    signals: List[str] = field(default_factory=list)
    video_relevance: float = 0.0

    def to_dict(self) -> dict:
        return {
            "adjusted_score": self.adjusted_score,
            "context": self.context.value,
            "is_legitimate": self.is_legitimate,
            "score_adjustment": self.score_adjustment,
            "sentiment": self.sentiment.value,
            "signals": list(self.signals),
            "video_relevance": self.video_relevance,
        }


@dataclass
class BehavioralSignals:
    """Structural features of a comment, independent of its vocabulary."""
    word_count: int = 0
    has_links: bool = False
    has_question_mark: bool = False
    has_exclamation: bool = False


@dataclass(frozen=True)
class LegitimacyAssessment:
    """Why a cluster representative looks genuine, and how much to subtract."""
    category: LegitimacyCategory
    reduction: int
    reason: str


# =============================================================================
# ANALYZER
# =============================================================================

class ContextualAnalyzer:
    """Adjusts spam scores using the communicative context of a comment."""

    _LINK_PATTERN = re.compile(r'(?:https?://|www\.|\.com|\.id|\.net|\.org)', re.IGNORECASE)
    _PUNCTUATION = re.compile(r'[^\w\s]|_')

    def __init__(self, config: Optional[DetectionConfig] = None):
        self.config = config or DEFAULT_CONFIG

    # -------------------------------------------------------------------------
    # Context detection
    # -------------------------------------------------------------------------

    def has_educational_context(self, text: str) -> bool:
        return contains_keyword(text.lower(), self.config.educational_keywords)

    def has_question_pattern(self, text: str) -> bool:
        return '?' in text or contains_keyword(text.lower(), self.config.question_keywords)

    def has_warning_context(self, text: str) -> bool:
        return contains_keyword(text.lower(), self.config.warning_keywords)

    def has_correction_context(self, text: str) -> bool:
        return contains_keyword(text.lower(), self.config.correction_keywords)

    def has_promotional_indicators(self, text: str) -> bool:
        """Two or more distinct promotional indicators."""
        count = count_keywords(text.lower(), self.config.promotional_indicators)
        return count >= self.config.promotional_indicator_min

    def analyze_sentiment(self, text: str) -> Sentiment:
        lowered = text.lower()
        constructive = count_keywords(lowered, self.config.constructive_words)
        promotional = count_keywords(lowered, self.config.promotional_words)

        if constructive > promotional:
            return Sentiment.CONSTRUCTIVE
        if promotional > constructive:
            return Sentiment.PROMOTIONAL
        return Sentiment.NEUTRAL

    def behavioral_signals(self, text: str) -> BehavioralSignals:
        if not text:
            return BehavioralSignals()

        words = self._PUNCTUATION.sub(' ', text).split()
        return BehavioralSignals(
            word_count=len(words),
            has_links=bool(self._LINK_PATTERN.search(text)),
            has_question_mark='?' in text,
            has_exclamation='!' in text,
        )

    # -------------------------------------------------------------------------
    # Score adjustment
    # -------------------------------------------------------------------------

    def analyze_context(self, text: str, current_score: int) -> ContextResult:
        """
        Adjust a spam score for the context of a comment.

        Educational context wins over a question, which wins over a warning.
        Promotional indicators then push the score up and cancel legitimacy.

        Args:
            text: Comment text
            current_score: Spam score before adjustment (0-100)

        Returns:
            ContextResult with the clamped, adjusted score
        """
        if not text:
            return ContextResult(adjusted_score=max(0, min(MAX_SCORE, current_score)))

        cfg = self.config
        is_promotional = self.has_promotional_indicators(text)
        sentiment = self.analyze_sentiment(text)

        adjustment = 0
        context = ContextLabel.UNKNOWN
        signals = []

        if self.has_educational_context(text):
            adjustment += cfg.educational_adjustment
            context = ContextLabel.EDUCATIONAL
            signals.append(f"Educational context ({cfg.educational_adjustment})")
        elif self.has_question_pattern(text) and not is_promotional:
            adjustment += cfg.question_adjustment
            context = ContextLabel.QUESTION
            signals.append(f"Question pattern ({cfg.question_adjustment})")
        elif self.has_warning_context(text):
            adjustment += cfg.warning_adjustment
            context = ContextLabel.WARNING
            signals.append(f"Warning context ({cfg.warning_adjustment})")

        if is_promotional:
            adjustment += cfg.promotional_adjustment
            context = ContextLabel.PROMOTIONAL
            signals.append(f"Promotional indicators (+{cfg.promotional_adjustment})")

        if sentiment is Sentiment.CONSTRUCTIVE:
            adjustment -= cfg.sentiment_adjustment
            signals.append(f"Constructive sentiment (-{cfg.sentiment_adjustment})")
        elif sentiment is Sentiment.PROMOTIONAL:
            adjustment += cfg.sentiment_adjustment
            signals.append(f"Promotional sentiment (+{cfg.sentiment_adjustment})")

        behavior = self.behavioral_signals(text)
        if behavior.has_links:
            signals.append("Contains link")

        return ContextResult(
            adjusted_score=max(0, min(MAX_SCORE, current_score + adjustment)),
            context=context,
            is_legitimate=context in (
                ContextLabel.EDUCATIONAL, ContextLabel.QUESTION, ContextLabel.WARNING,
            ),
            score_adjustment=adjustment,
            sentiment=sentiment,
            signals=signals,
        )

    def should_whitelist(self, text: str) -> bool:
        """
        Check if a comment should bypass spam detection.

        Whitelisted when educational without promotion, cautionary, or a
        short question.
        """
        if not text:
            return False

        if self.has_educational_context(text) and not self.has_promotional_indicators(text):
            return True

        if self.has_warning_context(text):
            return True

        return len(text) < self.config.whitelist_question_max_length and '?' in text

    # -------------------------------------------------------------------------
    # Video context
    # -------------------------------------------------------------------------

    def extract_keywords(self, text: str) -> List[str]:
        """Lower-cased words of at least the minimum keyword length."""
        if not text:
            return []

        words = self._PUNCTUATION.sub(' ', text.lower()).split()
        return [word for word in words if len(word) >= self.config.min_keyword_length]

    def extract_topics(self, context: VideoContext) -> List[str]:
        """
        Topic words of a video: title, description snippet, tags and category.

        Stop words are dropped. Topic expansions add domain slang when the
        video matches one of their indicators.
        """
        cfg = self.config
        topics: List[str] = []
        topics.extend(self.extract_keywords(context.title))
        topics.extend(self.extract_keywords(context.description[:cfg.description_snippet_length]))
        topics.extend(tag.lower() for tag in context.tags)
        if context.category:
            topics.append(context.category.lower())

        stop_words = set(cfg.stop_words)
        unique_topics = []
        for topic in topics:
            if topic and topic not in stop_words and topic not in unique_topics:
                unique_topics.append(topic)

        category = context.category.lower()
        for expansion in cfg.topic_expansions:
            matches_topic = any(indicator in unique_topics for indicator in expansion.indicators)
            matches_category = any(hint in category for hint in expansion.category_hints)
            if matches_topic or matches_category:
                logger.debug(f"Expanding video topics with '{expansion.name}' keywords")
                for keyword in expansion.keywords:
                    if keyword not in unique_topics:
                        unique_topics.append(keyword)

        return unique_topics

    def video_relevance(self, text: str, context: Optional[VideoContext]) -> float:
        """Fraction of the comment's keywords that are video topics."""
        if context is None or context.is_empty:
            return 0.0

        keywords = self.extract_keywords(text)
        topics = set(self.extract_topics(context))
        if not keywords or not topics:
            return 0.0

        matched = sum(1 for keyword in keywords if keyword in topics)
        return round(matched / len(keywords), 2)

    def analyze_with_video_context(
        self,
        text: str,
        current_score: int,
        context: Optional[VideoContext] = None,
    ) -> ContextResult:
        """
        Adjust a single comment's score for its context and its video.

        Runs ``analyze_context`` first. A comment that talks about the video's
        topic is then marked legitimate and lowered further: strongly for at
        least half of its keywords matching, moderately for a partial match.

        Args:
            text: Comment text
            current_score: Spam score before adjustment (0-100)
            context: Merged channel/video metadata

        Returns:
            ContextResult including the comment's video relevance
        """
        result = self.analyze_context(text, current_score)
        if context is None or context.is_empty:
            return result

        cfg = self.config
        relevance = self.video_relevance(text, context)
        result.video_relevance = relevance

        if relevance >= cfg.video_relevance_threshold:
            adjustment = cfg.video_relevant_adjustment
            result.signals.append(f"Comment highly relevant to video topic ({relevance:.0%} match)")
        elif relevance >= cfg.video_partial_relevance_threshold:
            adjustment = cfg.video_partial_adjustment
            result.signals.append(f"Comment relevant to video topic ({relevance:.0%} match)")
        else:
            return result

        result.context = ContextLabel.VIDEO_RELEVANT
        result.is_legitimate = True
        result.score_adjustment += adjustment
        result.adjusted_score = max(0, min(MAX_SCORE, result.adjusted_score + adjustment))
        return result

    def assess_legitimacy(
        self,
        text: str,
        context: Optional[VideoContext] = None,
        has_spam_keywords: bool = False,
    ) -> Optional[LegitimacyAssessment]:
        """
        Find the strongest reason to believe a comment is genuine.

        Args:
            text: Representative comment text
            context: Merged channel/video metadata
            has_spam_keywords: Whether money/urgency/link keywords were found

        Returns:
            The applicable category with the largest reduction, or None
        """
        if not text:
            return None

        cfg = self.config
        behavior = self.behavioral_signals(text)
        no_promotion = not behavior.has_links and not has_spam_keywords
        categories = []

        if no_promotion and 1 <= behavior.word_count <= cfg.short_genuine_max_words:
            categories.append(LegitimacyCategory.SHORT_GENUINE)

        if (
            no_promotion
            and 1 <= behavior.word_count <= cfg.simple_praise_max_words
            and (behavior.has_exclamation or contains_keyword(text.lower(), cfg.constructive_words))
        ):
            categories.append(LegitimacyCategory.SIMPLE_PRAISE)

        relevance = self.video_relevance(text, context)
        if relevance >= cfg.video_relevance_threshold:
            categories.append(LegitimacyCategory.VIDEO_RELEVANT)

        if (
            self.has_educational_context(text)
            or (self.has_question_pattern(text) and not self.has_promotional_indicators(text))
            or self.has_correction_context(text)
        ):
            categories.append(LegitimacyCategory.EDUCATIONAL)

        if not categories:
            return None

        category = max(categories, key=lambda cat: cfg.legitimacy_reductions.get(cat, 0))
        reason = category.display_name
        if category is LegitimacyCategory.VIDEO_RELEVANT:
            reason = f"{reason} ({relevance:.0%} keyword match)"

        return LegitimacyAssessment(
            category=category,
            reduction=cfg.legitimacy_reductions.get(category, 0),
            reason=reason,
        )
