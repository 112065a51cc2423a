"""
Fancy Unicode Detection for Comments.

Spam campaigns dress keywords up in "fancy" fonts (𝐒𝐋𝐎𝐓, ＧＡＣＯＲ, Ⓙⓤⓓⓞⓛ)
so plain keyword filters never see them. This module recognizes characters
from the Unicode blocks that imitate Latin letters and digits, and maps each
one back to ASCII by its offset inside the block.

Zalgo-style text (letters buried under combining marks) is flagged as fancy
too, even when no character comes from a fancy block.

Usage:
    analyzer = UnicodeAnalyzer()
    analyzer.has_fancy("𝐒𝐋𝐎𝐓 𝐆𝐀𝐂𝐎𝐑")   # True
    analyzer.normalize("𝐒𝐋𝐎𝐓 𝐆𝐀𝐂𝐎𝐑")   # "SLOT GACOR"
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional

from campaign_core.config import DEFAULT_CONFIG, DetectionConfig
from campaign_core.constants import (
    UNKNOWN_CHAR,
    VARIATION_SELECTOR_RANGE,
    FancyRange,
    RangeKind,
)


# =============================================================================
# DATA CLASSES
# =============================================================================

class FancyChar(NamedTuple):
    """A fancy character found in a text."""
    position: int
    char: str
    code_point: int
    range_key: str
    range_name: str


@dataclass
class UnicodeStatistics:
    """Summary of the fancy Unicode content of a text."""
    has_fancy: bool = False
    count: int = 0
    density: float = 0.0
    ranges: Dict[str, int] = field(default_factory=dict)
    normalized: str = ""
    combining_marks: int = 0

    def to_dict(self) -> dict:
        return {
            "has_fancy": self.has_fancy,
            "count": self.count,
            "density": self.density,
            "ranges": dict(self.ranges),
            "normalized": self.normalized,
            "combining_marks": self.combining_marks,
        }


# =============================================================================
# ANALYZER
# =============================================================================

def _to_ascii(fancy_range: FancyRange, code_point: int) -> str:
    """Map a code point to ASCII by its offset inside ``fancy_range``."""
    offset = code_point - fancy_range.start

    if fancy_range.kind is RangeKind.DIGIT:
        return chr(ord('0') + offset) if offset < 10 else UNKNOWN_CHAR
    if fancy_range.kind is RangeKind.UPPER:
        return chr(ord('A') + offset) if offset < 26 else UNKNOWN_CHAR
    if fancy_range.kind is RangeKind.LOWER:
        return chr(ord('a') + offset) if offset < 26 else UNKNOWN_CHAR

    if offset < 26:
        return chr(ord('A') + offset)
    if offset < 52:
        return chr(ord('a') + offset - 26)
    return UNKNOWN_CHAR


class UnicodeAnalyzer:
    """
    Detects and normalizes fancy Unicode fonts.

    Every method accepts empty input and returns the matching "nothing found"
    value (False, 0, 0.0 or "").
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._ranges = self.config.fancy_ranges
        self._combining_limit = self.config.combining_mark_limit

    def find_range(self, char: str) -> Optional[FancyRange]:
        """Return the fancy range containing ``char``, if any."""
        code_point = ord(char)
        for fancy_range in self._ranges:
            if fancy_range.start <= code_point <= fancy_range.end:
                return fancy_range
        return None

    def is_fancy_char(self, char: str) -> bool:
        return self.find_range(char) is not None

    def has_fancy(self, text: str) -> bool:
        """Check if text uses fancy fonts or heavy combining marks."""
        if not text:
            return False

        if any(self.is_fancy_char(char) for char in text):
            return True

        return self.combining_mark_count(text) > self._combining_limit

    def fancy_count(self, text: str) -> int:
        if not text:
            return 0
        return sum(1 for char in text if self.is_fancy_char(char))

    def fancy_positions(self, text: str) -> List[FancyChar]:
        """List every fancy character with its position and source range."""
        if not text:
            return []

        positions = []
        for position, char in enumerate(text):
            fancy_range = self.find_range(char)
            if fancy_range is not None:
                positions.append(FancyChar(
                    position=position,
                    char=char,
                    code_point=ord(char),
                    range_key=fancy_range.key,
                    range_name=fancy_range.name,
                ))
        return positions

    def combining_mark_count(self, text: str) -> int:
        """Count combining marks, variation selectors included."""
        if not text:
            return 0

        low, high = VARIATION_SELECTOR_RANGE
        return sum(
            1 for char in text
            if unicodedata.combining(char) or low <= ord(char) <= high
        )

    def density(self, text: str) -> float:
        """Fraction of characters that are fancy."""
        if not text:
            return 0.0
        return self.fancy_count(text) / len(text)

    def normalize(self, text: str) -> str:
        """
        Replace every fancy character with its ASCII equivalent.

        Characters outside the fancy ranges are left untouched, so the
        result is stable under repeated normalization.
        """
        if not text:
            return ""

        chars = []
        for char in text:
            fancy_range = self.find_range(char)
            if fancy_range is None:
                chars.append(char)
            else:
                chars.append(_to_ascii(fancy_range, ord(char)))
        return ''.join(chars)

    def statistics(self, text: str) -> UnicodeStatistics:
        """Full fancy Unicode breakdown of a text."""
        if not text:
            return UnicodeStatistics()

        ranges: Dict[str, int] = {}
        for fancy_char in self.fancy_positions(text):
            ranges[fancy_char.range_name] = ranges.get(fancy_char.range_name, 0) + 1

        count = sum(ranges.values())
        return UnicodeStatistics(
            has_fancy=self.has_fancy(text),
            count=count,
            density=round(count / len(text), 4),
            ranges=ranges,
            normalized=self.normalize(text),
            combining_marks=self.combining_mark_count(text),
        )
