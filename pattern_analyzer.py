"""
Lexical spam signals for a single comment.

Looks for money talk, urgency and link promotion by whole-word keyword match,
plus two style signals: emoji density and the share of capital letters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from campaign_core.config import DEFAULT_CONFIG, DetectionConfig
from campaign_core.keywords import contains_keyword, find_keywords

# Signal labels
MONEY_SIGNAL = "money_mentions"
URGENCY_SIGNAL = "urgency_language"
LINK_SIGNAL = "link_promotion"
EMOJI_SIGNAL = "high_emoji_density"
CAPS_SIGNAL = "excessive_caps"


@dataclass
class PatternResult:
    """Spam signals detected in one comment."""
    has_money: bool = False
    has_urgency: bool = False
    has_link_promotion: bool = False
    emoji_density: float = 0.0
    caps_ratio: float = 0.0
    signals: List[str] = field(default_factory=list)

    @property
    def has_spam_keywords(self) -> bool:
        return self.has_money or self.has_urgency or self.has_link_promotion

    def to_dict(self) -> dict:
        return {
            "has_money": self.has_money,
            "has_urgency": self.has_urgency,
            "has_link_promotion": self.has_link_promotion,
            "emoji_density": self.emoji_density,
            "caps_ratio": self.caps_ratio,
            "signals": list(self.signals),
        }


class PatternAnalyzer:
    """Keyword and style signal detection."""

    def __init__(self, config: Optional[DetectionConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._emoji_pattern = re.compile(
            '[' + ''.join(f'\\U{start:08X}-\\U{end:08X}' for start, end in self.config.emoji_ranges) + ']'
        )
        self._keyword_groups = {
            "money": self.config.money_keywords,
            "urgency": self.config.urgency_keywords,
            "link": self.config.link_keywords,
        }

    def analyze(self, text: str, normalized: Optional[str] = None) -> PatternResult:
        """
        Detect spam signals in a comment.

        Args:
            text: Original comment text (used for emoji and caps)
            normalized: Optional canonical form of the same comment; keywords
                hidden by obfuscation are matched against it as well

        Returns:
            PatternResult with flags, ratios and signal labels
        """
        if not text:
            return PatternResult()

        candidates = [text.lower()]
        if normalized:
            candidates.append(normalized.lower())

        def matches(keywords) -> bool:
            return any(contains_keyword(candidate, keywords) for candidate in candidates)

        result = PatternResult(
            has_money=matches(self.config.money_keywords),
            has_urgency=matches(self.config.urgency_keywords),
            has_link_promotion=matches(self.config.link_keywords),
            emoji_density=round(self.emoji_density(text), 4),
            caps_ratio=round(self.caps_ratio(text), 4),
        )

        if result.has_money:
            result.signals.append(MONEY_SIGNAL)
        if result.has_urgency:
            result.signals.append(URGENCY_SIGNAL)
        if result.has_link_promotion:
            result.signals.append(LINK_SIGNAL)
        if result.emoji_density > self.config.emoji_density_threshold:
            result.signals.append(EMOJI_SIGNAL)
        if result.caps_ratio > self.config.caps_ratio_threshold:
            result.signals.append(CAPS_SIGNAL)

        return result

    def matched_keywords(self, text: str) -> Dict[str, List[str]]:
        """Keywords found in ``text``, grouped by signal type."""
        lowered = text.lower() if text else ""
        return {
            group: find_keywords(lowered, keywords)
            for group, keywords in self._keyword_groups.items()
        }

    def emoji_count(self, text: str) -> int:
        if not text:
            return 0
        return len(self._emoji_pattern.findall(text))

    def emoji_density(self, text: str) -> float:
        """Emoji code points divided by total characters."""
        if not text:
            return 0.0
        return self.emoji_count(text) / len(text)

    def caps_ratio(self, text: str) -> float:
        """Uppercase ASCII letters divided by ASCII letters."""
        if not text:
            return 0.0

        letters = [char for char in text if char.isascii() and char.isalpha()]
        if not letters:
            return 0.0
        return sum(1 for char in letters if char.isupper()) / len(letters)
