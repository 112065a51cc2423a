"""
Immutable detection configuration.

Every analyzer receives a ``DetectionConfig`` snapshot at construction time.
The snapshot is frozen so a batch in progress always sees one complete set of
tables, even if a newer configuration is swapped in by ``ConfigStore``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Tuple

from campaign_core import constants as c
from campaign_core.constants import FancyRange, LegitimacyCategory, TopicExpansion


@dataclass(frozen=True)
class DetectionConfig:
    """All tables, thresholds and weights used by the detection engine."""

    # Unicode
    fancy_ranges: Tuple[FancyRange, ...] = c.FANCY_RANGES
    combining_mark_limit: int = c.COMBINING_MARK_LIMIT

    # Fuzzy matching
    separator_chars: str = c.SEPARATOR_CHARS
    leet_map: Mapping[str, str] = field(default_factory=lambda: c.LEET_MAP)
    visual_map: Mapping[str, str] = field(default_factory=lambda: c.VISUAL_MAP)
    max_fuzzy_distance: int = c.MAX_FUZZY_DISTANCE
    levenshtein_max_length: int = c.LEVENSHTEIN_MAX_LENGTH

    # Lexical signals
    money_keywords: Tuple[str, ...] = c.MONEY_KEYWORDS
    urgency_keywords: Tuple[str, ...] = c.URGENCY_KEYWORDS
    link_keywords: Tuple[str, ...] = c.LINK_KEYWORDS
    emoji_ranges: Tuple[Tuple[int, int], ...] = c.EMOJI_RANGES
    emoji_density_threshold: float = c.EMOJI_DENSITY_THRESHOLD
    caps_ratio_threshold: float = c.CAPS_RATIO_THRESHOLD

    # Context
    educational_keywords: Tuple[str, ...] = c.EDUCATIONAL_KEYWORDS
    question_keywords: Tuple[str, ...] = c.QUESTION_KEYWORDS
    warning_keywords: Tuple[str, ...] = c.WARNING_KEYWORDS
    correction_keywords: Tuple[str, ...] = c.CORRECTION_KEYWORDS
    promotional_indicators: Tuple[str, ...] = c.PROMOTIONAL_INDICATORS
    constructive_words: Tuple[str, ...] = c.CONSTRUCTIVE_WORDS
    promotional_words: Tuple[str, ...] = c.PROMOTIONAL_WORDS
    stop_words: Tuple[str, ...] = c.STOP_WORDS
    topic_expansions: Tuple[TopicExpansion, ...] = c.TOPIC_EXPANSIONS
    educational_adjustment: int = c.EDUCATIONAL_ADJUSTMENT
    question_adjustment: int = c.QUESTION_ADJUSTMENT
    warning_adjustment: int = c.WARNING_ADJUSTMENT
    promotional_adjustment: int = c.PROMOTIONAL_ADJUSTMENT
    sentiment_adjustment: int = c.SENTIMENT_ADJUSTMENT
    promotional_indicator_min: int = c.PROMOTIONAL_INDICATOR_MIN
    whitelist_question_max_length: int = c.WHITELIST_QUESTION_MAX_LENGTH
    legitimacy_reductions: Mapping[LegitimacyCategory, int] = field(
        default_factory=lambda: c.LEGITIMACY_REDUCTIONS
    )
    short_genuine_max_words: int = c.SHORT_GENUINE_MAX_WORDS
    simple_praise_max_words: int = c.SIMPLE_PRAISE_MAX_WORDS
    video_relevance_threshold: float = c.VIDEO_RELEVANCE_THRESHOLD
    video_relevant_adjustment: int = c.VIDEO_RELEVANT_ADJUSTMENT
    video_partial_relevance_threshold: float = c.VIDEO_PARTIAL_RELEVANCE_THRESHOLD
    video_partial_adjustment: int = c.VIDEO_PARTIAL_ADJUSTMENT
    description_snippet_length: int = c.DESCRIPTION_SNIPPET_LENGTH
    min_keyword_length: int = c.MIN_KEYWORD_LENGTH

    # Clustering
    pass1_threshold: float = c.PASS1_SIMILARITY_THRESHOLD
    merge_threshold: float = c.MERGE_SIMILARITY_THRESHOLD
    ngram_size: int = c.NGRAM_SIZE
    ngram_bonus_weight: float = c.NGRAM_BONUS_WEIGHT
    min_cluster_size: int = c.MIN_CLUSTER_SIZE

    # Templates and scoring
    amount_words: Tuple[str, ...] = c.AMOUNT_WORDS
    number_placeholder: str = c.NUMBER_PLACEHOLDER
    amount_placeholder: str = c.AMOUNT_PLACEHOLDER
    specificity_base: int = c.TEMPLATE_SPECIFICITY_BASE
    specificity_penalty: int = c.TEMPLATE_PLACEHOLDER_PENALTY
    size_score_bands: Tuple[Tuple[int, int], ...] = c.SIZE_SCORE_BANDS
    money_points: int = c.MONEY_POINTS
    urgency_points: int = c.URGENCY_POINTS
    link_points: int = c.LINK_POINTS
    emoji_points: int = c.EMOJI_POINTS
    caps_points: int = c.CAPS_POINTS
    low_diversity_threshold: float = c.LOW_DIVERSITY_THRESHOLD
    low_diversity_bonus: int = c.LOW_DIVERSITY_BONUS
    high_diversity_threshold: float = c.HIGH_DIVERSITY_THRESHOLD
    high_diversity_min_members: int = c.HIGH_DIVERSITY_MIN_MEMBERS
    high_diversity_bonus: int = c.HIGH_DIVERSITY_BONUS
    unicode_bonus: int = c.UNICODE_BONUS
    campaign_threshold: int = c.SPAM_CAMPAIGN_THRESHOLD

    def with_overrides(self, **overrides: Any) -> DetectionConfig:
        """
        Return a copy with the given fields replaced.

        Lists are frozen into tuples and dicts into read-only mappings so the
        copy stays immutable. Unknown field names raise ``TypeError``.
        """
        frozen = {name: _freeze(value) for name, value in overrides.items()}
        return dataclasses.replace(self, **frozen)

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        """Names of every configurable field."""
        return tuple(f.name for f in dataclasses.fields(cls))


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, dict):
        return MappingProxyType(dict(value))
    return value


DEFAULT_CONFIG = DetectionConfig()
