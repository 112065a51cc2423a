"""
Fuzzy keyword matching against obfuscated spellings.

Spammers split keywords with separators (j.u.d.o.l), swap letters for digits
(jud0l, g4c0r) and borrow look-alike Cyrillic/Greek letters (GΔCOR). Text is
first collapsed into a canonical ``[a-z0-9]`` form; the remaining typos are
absorbed by a small edit-distance tolerance.

Usage:
    matcher = FuzzyMatcher()
    matcher.normalize("J-U-D-0-L")                      # "judol"
    matcher.find_best_match("jud0l", ["judol", "slot"])  # FuzzyMatch("judol", 0, "judol")
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import List, NamedTuple, Optional, Sequence

from rapidfuzz.distance import Levenshtein

from campaign_core.config import DEFAULT_CONFIG, DetectionConfig


# =============================================================================
# DATA CLASSES
# =============================================================================

class FuzzyMatch(NamedTuple):
    """Best keyword match for a text; ``match`` is None when nothing is close."""
    match: Optional[str]
    distance: Optional[int]
    normalized: str


class WordMatch(NamedTuple):
    """A single word of a text that matched a keyword."""
    word: str
    match: str
    distance: int
    position: int


@dataclass
class FuzzyStatistics:
    """Per-text summary of fuzzy keyword matches."""
    has_match: bool = False
    match_count: int = 0
    total_words: int = 0
    matches: List[WordMatch] = field(default_factory=list)
    confidence: float = 0.0

    def to_dict(self) -> dict:
        return {
            "has_match": self.has_match,
            "match_count": self.match_count,
            "total_words": self.total_words,
            "matches": [m._asdict() for m in self.matches],
            "confidence": self.confidence,
        }


# =============================================================================
# MATCHER
# =============================================================================

class FuzzyMatcher:
    """
    Normalizes obfuscated text and matches it against keywords.

    Normalization steps:
    1. Lower-case
    2. Strip separators (. - _ | * + / \\ and spaces)
    3. Map Cyrillic/Greek homoglyphs to Latin
    4. Substitute leet-speak digits and symbols
    5. Delete everything outside [a-z0-9]
    """

    _NON_ALNUM = re.compile(r'[^a-z0-9]')
    _WORDS = re.compile(r'\S+')

    def __init__(self, config: Optional[DetectionConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.max_distance = self.config.max_fuzzy_distance
        self._separator_table = str.maketrans('', '', self.config.separator_chars)
        self._visual_table = str.maketrans(dict(self.config.visual_map))
        self._leet_table = str.maketrans(dict(self.config.leet_map))

    def normalize(self, text: str) -> str:
        """Collapse an obfuscated text into its canonical form."""
        if not text:
            return ""

        normalized = text.lower()
        normalized = normalized.translate(self._separator_table)
        normalized = normalized.translate(self._visual_table)
        normalized = normalized.translate(self._leet_table)
        return self._NON_ALNUM.sub('', normalized)

    def edit_distance(self, a: str, b: str) -> int:
        """
        Edit distance between two already-normalized strings.

        Strings longer than the configured cap fall back to an approximation
        from ``difflib`` similarity.
        """
        if a == b:
            return 0

        limit = self.config.levenshtein_max_length
        if len(a) <= limit and len(b) <= limit:
            return Levenshtein.distance(a, b)

        max_len = max(len(a), len(b))
        ratio = SequenceMatcher(None, a, b, autojunk=False).ratio()
        return int(max_len * (1 - ratio) + 0.5)

    def distance(self, a: str, b: str) -> int:
        """Edit distance between the normalized forms of ``a`` and ``b``."""
        return self.edit_distance(self.normalize(a), self.normalize(b))

    def is_similar(self, a: str, b: str, max_distance: Optional[int] = None) -> bool:
        if max_distance is None:
            max_distance = self.max_distance
        return self.distance(a, b) <= max_distance

    def find_best_match(
        self,
        text: str,
        keywords: Sequence[str],
        max_distance: Optional[int] = None,
    ) -> FuzzyMatch:
        """
        Find the keyword closest to ``text``.

        Ties keep the earlier keyword. Keywords that normalize to nothing are
        skipped.

        Returns:
            FuzzyMatch with the keyword and distance, or ``match=None`` if no
            keyword is within ``max_distance``
        """
        if max_distance is None:
            max_distance = self.max_distance

        normalized = self.normalize(text)
        if not normalized:
            return FuzzyMatch(None, None, normalized)

        best_match = None
        best_distance = None
        for keyword in keywords:
            normalized_keyword = self.normalize(keyword)
            if not normalized_keyword:
                continue

            distance = self.edit_distance(normalized, normalized_keyword)
            if best_distance is None or distance < best_distance:
                best_match = keyword
                best_distance = distance

        if best_distance is None or best_distance > max_distance:
            return FuzzyMatch(None, None, normalized)

        return FuzzyMatch(best_match, best_distance, normalized)

    def contains_fuzzy_match(
        self,
        text: str,
        keywords: Sequence[str],
        max_distance: Optional[int] = None,
    ) -> bool:
        """Check if any word of ``text`` is close to a keyword."""
        return bool(self.find_all_matches(text, keywords, max_distance))

    def find_all_matches(
        self,
        text: str,
        keywords: Sequence[str],
        max_distance: Optional[int] = None,
    ) -> List[WordMatch]:
        """Match every whitespace-separated word of ``text`` against the keywords."""
        if not text:
            return []

        matches = []
        for word_match in self._WORDS.finditer(text):
            word = word_match.group()
            result = self.find_best_match(word, keywords, max_distance)
            if result.match is not None:
                matches.append(WordMatch(
                    word=word,
                    match=result.match,
                    distance=result.distance,
                    position=word_match.start(),
                ))
        return matches

    def get_statistics(self, text: str, keywords: Sequence[str]) -> FuzzyStatistics:
        """
        Summarize fuzzy matches in ``text``.

        Confidence blends how close the matches are (70%) with how much of the
        text matched (30%).
        """
        if not text:
            return FuzzyStatistics()

        total_words = len(text.split())
        matches = self.find_all_matches(text, keywords)
        if not matches:
            return FuzzyStatistics(total_words=total_words)

        avg_distance = sum(m.distance for m in matches) / len(matches)
        closeness = max(0.0, 1 - avg_distance / (2 * self.max_distance)) if self.max_distance else 1.0
        coverage = min(1.0, len(matches) / total_words)
        confidence = round(0.7 * closeness + 0.3 * coverage, 2)

        return FuzzyStatistics(
            has_match=True,
            match_count=len(matches),
            total_words=total_words,
            matches=matches,
            confidence=confidence,
        )
