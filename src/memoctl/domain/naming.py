"""Context strings, file-name fragments and topic keys.

Three different sanitizers, each with its own character set:

- :func:`sanitize_context` — stored in the ``context`` field. Unsafe
  characters are dropped and whitespace collapsed.
- :func:`safe_file_fragment` — the human part of a document file name.
  Unsafe characters and whitespace runs become ``_``.
- :func:`topic_key` — the topic file name. Unsafe characters become ``-``.
"""

from __future__ import annotations

import re

from memoctl.domain.links import replace_with_display

_CONTEXT_UNSAFE = re.compile(r"[/\\?%*:|\"<>#\[\]]")
_FILE_UNSAFE = re.compile(r"[/\\?%*:|\"<>]")
_TOPIC_UNSAFE = re.compile(r"[<>:\"/\\|?*]")
_WHITESPACE = re.compile(r"\s+")


def first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def sanitize_context(text: str) -> str:
    """Remove characters unsafe for the ``context`` field and collapse whitespace."""
    cleaned = _CONTEXT_UNSAFE.sub("", text)
    return _WHITESPACE.sub(" ", cleaned).strip()


def context_from_input(text: str) -> str:
    """``context`` for a new document: first input line, wikilinks unwrapped, sanitized."""
    return sanitize_context(replace_with_display(first_line(text)))


def safe_file_fragment(text: str) -> str:
    """File-name fragment: unsafe characters and whitespace runs become ``_``."""
    return _WHITESPACE.sub("_", _FILE_UNSAFE.sub("_", text)).strip()


def topic_key(context: str) -> str:
    """Topic file stem for *context*: ``< > : " / \\ | ? *`` become ``-``."""
    return _TOPIC_UNSAFE.sub("-", context)


def document_file_name(timestamp: str, kind: str, text: str, *, limit: int | None = None) -> str:
    """``{timestamp}_{kind}_{fragment}.md`` from the first line of *text*."""
    line = replace_with_display(first_line(text))
    if limit is not None:
        line = line[:limit]
    return f"{timestamp}_{kind}_{safe_file_fragment(line)}.md"
