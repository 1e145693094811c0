"""Text helpers shared by the parsers and the category classifier."""

import re
from typing import Iterable, Optional

# Separators left dangling at either end once structural words are removed
STRIP_CHARS = ' \t:：,，、.。!！-'


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs and trim dangling separators."""
    return re.sub(r'\s+', ' ', text).strip(STRIP_CHARS)


def keyword_regex(keyword: str) -> str:
    """Regex source for a vocabulary keyword; latin words only match whole words.

    The boundaries only look at latin letters and digits, so a latin keyword
    glued to CJK text (``uber叫車``) still matches.
    """
    if keyword.isascii():
        words = r'\s+'.join(re.escape(part) for part in keyword.split())
        return r'(?<![A-Za-z0-9])' + words + r'(?![A-Za-z0-9])'
    return re.escape(keyword)


def keyword_pattern(keywords: Iterable[str]) -> re.Pattern:
    """Case-insensitive pattern matching any of ``keywords``, earlier ones first."""
    return re.compile('|'.join(keyword_regex(k) for k in keywords), re.IGNORECASE)


def remove_once(text: str, span: Optional[str]) -> str:
    """Remove the first occurrence of ``span`` from ``text``."""
    if not span:
        return text
    return text.replace(span, '', 1)
