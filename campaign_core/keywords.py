"""
Keyword matching helpers.

Keywords are matched as whole words (``\\b`` boundaries) against lower-cased
text, never by substring containment. An entry starting with ``re:`` is taken
as a raw regular expression. Patterns are compiled once and cached; a pattern
that fails to compile is logged and then behaves as "no match".
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable, List, Optional, Pattern

from campaign_core.constants import REGEX_PREFIX

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4096)
def compile_keyword(keyword: str) -> Optional[Pattern[str]]:
    """
    Compile a keyword into a case-insensitive word-boundary pattern.

    Args:
        keyword: Plain word/phrase, or ``re:<pattern>`` for a raw regex

    Returns:
        Compiled pattern, or None if the keyword is empty or invalid
    """
    if keyword.startswith(REGEX_PREFIX):
        source = keyword[len(REGEX_PREFIX):]
    else:
        keyword = keyword.strip().lower()
        source = re.escape(keyword)
        # \b only holds next to a word character ('100%', '.com')
        if keyword[:1].isalnum() or keyword[:1] == '_':
            source = r'\b' + source
        if keyword[-1:].isalnum() or keyword[-1:] == '_':
            source = source + r'\b'

    if not keyword or not source:
        return None

    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as e:
        logger.warning(f"Invalid keyword pattern '{keyword}': {e}")
        return None


def find_keywords(text: str, keywords: Iterable[str]) -> List[str]:
    """Return the keywords that occur in ``text``, in keyword order."""
    if not text:
        return []

    found = []
    for keyword in keywords:
        pattern = compile_keyword(keyword)
        if pattern is not None and pattern.search(text):
            found.append(keyword)
    return found


def contains_keyword(text: str, keywords: Iterable[str]) -> bool:
    """Check if any keyword occurs in ``text``."""
    if not text:
        return False

    for keyword in keywords:
        pattern = compile_keyword(keyword)
        if pattern is not None and pattern.search(text):
            return True
    return False


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    """Count how many distinct keywords occur in ``text``."""
    return len(find_keywords(text, keywords))
