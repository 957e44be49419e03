"""Wikilink extraction and rewriting.

Pure functions, no infrastructure dependencies. A wikilink is
``[[name]]`` or ``[[display|name]]``: the LAST pipe segment names the
target document, the first is the text shown to the reader.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

_WIKILINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")


@dataclass(frozen=True)
class WikiLink:
    """A wikilink extracted from text."""

    target: str  # document name the link points at
    display: str | None = None  # text before the pipe, if any

    @property
    def token(self) -> str:
        return format_wikilink(self.target)


def format_wikilink(name: str) -> str:
    return f"[[{name}]]"


def extract_wikilinks(text: str) -> list[WikiLink]:
    """Extract every ``[[...]]`` token from *text*, in order of appearance."""
    results: list[WikiLink] = []
    for match in _WIKILINK_PATTERN.finditer(text):
        parts = match.group(1).split("|")
        target = parts[-1].strip()
        display = parts[0].strip() if len(parts) > 1 else None
        results.append(WikiLink(target=target, display=display))
    return results


def replace_with_display(text: str) -> str:
    """Drop brackets, keeping the display part (or the name when there is none)."""
    return _WIKILINK_PATTERN.sub(lambda m: m.group(1).split("|")[0], text)


def replace_with_target(text: str) -> str:
    """Drop brackets, keeping the target name."""
    return _WIKILINK_PATTERN.sub(lambda m: m.group(1).split("|")[-1], text)


def confirmed_links(text: str, known_names: Iterable[str] | set[str]) -> list[str]:
    """Wikilink tokens in *text* whose target is in *known_names*.

    Deduplicated, first-occurrence order. Only targets confirmed to exist
    are returned; nothing keeps them fresh afterwards.
    """
    known = known_names if isinstance(known_names, set) else set(known_names)
    return dedupe(link.token for link in extract_wikilinks(text) if link.target in known)


def dedupe(tokens: Iterable[str]) -> list[str]:
    """Order-preserving de-duplication."""
    return list(dict.fromkeys(tokens))
