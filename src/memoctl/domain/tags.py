"""Hashtag extraction.

A hashtag is ``#`` followed by ASCII word characters or characters from the
Hiragana, Katakana and CJK Unified Ideographs blocks. Tags are case-folded.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_HASHTAG_PATTERN = re.compile(r"#[A-Za-z0-9_\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]+")


def extract_hashtags(text: str) -> set[str]:
    """Lower-cased hashtags in *text*.

    Examples:
        >>> sorted(extract_hashtags("note #プロジェクト and #Test"))
        ['#test', '#プロジェクト']
    """
    return {match.group(0).lower() for match in _HASHTAG_PATTERN.finditer(text)}


def collect_hashtags(texts: Iterable[str]) -> list[str]:
    """Deduplicated, sorted hashtags across *texts*."""
    found: set[str] = set()
    for text in texts:
        found |= extract_hashtags(text)
    return sorted(found)
