"""Frontmatter codec — parse the metadata header and patch it in place.

Persisted layout::

    ---
    type: memo
    context: "Plan A"
    links:
      - "[[Roadmap]]"
    created: "2025-03-29T08:02:00.000+09:00"
    ---

    Body text...

INVARIANT: :func:`patch_frontmatter` rewrites at most the lines owned by one
key. Every other line of the document (unknown keys, key order, body,
whitespace) comes back byte-identical.

Pure functions, no I/O. Parsing never raises: a missing or unterminated
block means "no metadata, the whole text is body".
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

DELIMITER = "---"

# Keys emitted first (in this order) when a document is rendered from scratch.
# Anything else follows in insertion order.
CANONICAL_KEY_ORDER: list[str] = [
    "type",
    "context",
    "source",
    "links",
    "created",
    "archived",
    "status",
    "pinned",
    "priority",
]

FrontmatterValue = str | list[str]

_KEY_LINE = re.compile(r"^([\w-]+):\s*(.*?)\s*$")
_LIST_ITEM = re.compile(r"^  - (.*?)\s*$")


# ---------------------------------------------------------------------------
# Block location
# ---------------------------------------------------------------------------


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r") == DELIMITER


def find_block(lines: list[str]) -> tuple[int, int] | None:
    """Return ``(open_index, close_index)`` of the frontmatter block.

    The opening delimiter must be the very first line. Returns None when it
    is absent or never closed.
    """
    if not lines or not _is_delimiter(lines[0]):
        return None
    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            return 0, index
    return None


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _body_after(lines: list[str], close: int) -> str:
    body = "\n".join(lines[close + 1 :])
    if body.startswith("\r\n"):
        return body[2:]
    if body.startswith("\n"):
        return body[1:]
    return body


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_frontmatter(text: str) -> tuple[dict[str, FrontmatterValue], str]:
    """Split *text* into ``(fields, body)``.

    Each ``key: value`` line is captured with surrounding matching quotes
    stripped. A key with an empty value collects the ``  - "item"`` lines
    that follow it into a list (this is how ``links`` is stored). Lines that
    match neither shape are skipped.
    """
    lines = text.split("\n")
    block = find_block(lines)
    if block is None:
        return {}, text

    _, close = block
    fields: dict[str, FrontmatterValue] = {}
    collecting: list[str] | None = None
    for raw in lines[1:close]:
        line = raw.rstrip("\r")
        item = _LIST_ITEM.match(line)
        if item is not None and collecting is not None:
            collecting.append(_strip_quotes(item.group(1)))
            continue

        match = _KEY_LINE.match(line)
        if match is None:
            collecting = None
            continue

        key, value = match.group(1), match.group(2)
        if value:
            fields[key] = _strip_quotes(value)
            collecting = None
        else:
            collecting = []
            fields[key] = collecting

    return fields, _body_after(lines, close)


def strip_frontmatter(text: str) -> str:
    """Return the body of *text* with the frontmatter block removed, trimmed."""
    lines = text.split("\n")
    block = find_block(lines)
    if block is None:
        return text.strip()
    return _body_after(lines, block[1]).strip()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def format_scalar(value: Any, *, quote: bool = False) -> str:
    """Render a scalar for a ``key: value`` line.

    Booleans become ``true``/``false``; enum members render bare. Plain
    strings are double-quoted only when *quote* is set.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, str):
        return f'"{value}"' if quote else value
    return str(value)


def render_field(key: str, value: Any, *, quote: bool = False) -> list[str]:
    """Render one key as its frontmatter lines (a list spans several lines)."""
    if isinstance(value, (list, tuple)):
        return [f"{key}:", *(f'  - "{item}"' for item in value)]
    return [f"{key}: {format_scalar(value, quote=quote)}"]


def order_frontmatter(fm: dict[str, Any]) -> dict[str, Any]:
    """Return *fm* with canonical keys first, then the rest in insertion order.

    ``None`` values and empty lists are omitted.
    """
    ordered: dict[str, Any] = {}
    for key in [*CANONICAL_KEY_ORDER, *fm]:
        if key in ordered or key not in fm:
            continue
        value = fm[key]
        if value is None or (isinstance(value, list) and not value):
            continue
        ordered[key] = value
    return ordered


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a new document: block, blank line, body.

    String values are double-quoted; enum, boolean and integer values are
    written bare.
    """
    lines = [DELIMITER]
    for key, value in order_frontmatter(frontmatter).items():
        lines.extend(render_field(key, value, quote=True))
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n\n" + body


# ---------------------------------------------------------------------------
# In-place patching
# ---------------------------------------------------------------------------


def patch_frontmatter(text: str, key: str, value: Any) -> str:
    """Set *key* to *value* while leaving every other line untouched.

    - Existing key: only its line (plus its list items, for a list key)
      is replaced.
    - Block without the key: a line is inserted right before the closing
      delimiter.
    - No block: a new block is prepended, followed by a blank line.

    Values are written bare (see :func:`format_scalar`); list items are
    double-quoted.
    """
    new_lines = render_field(key, value)
    lines = text.split("\n")
    block = find_block(lines)

    if block is None:
        return "\n".join([DELIMITER, *new_lines, DELIMITER, "", ""]) + text

    _, close = block
    for index in range(1, close):
        match = _KEY_LINE.match(lines[index].rstrip("\r"))
        if match is None or match.group(1) != key:
            continue
        end = index + 1
        if not match.group(2):
            while end < close and _LIST_ITEM.match(lines[end].rstrip("\r")):
                end += 1
        eol = "\r" if lines[index].endswith("\r") else ""
        replacement = [line + eol for line in new_lines]
        return "\n".join([*lines[:index], *replacement, *lines[end:]])

    eol = "\r" if lines[close].endswith("\r") else ""
    inserted = [line + eol for line in new_lines]
    return "\n".join([*lines[:close], *inserted, *lines[close:]])
