"""Metadata mutator — boolean flags, integer fields, priority stars.

Built on :func:`memoctl.domain.frontmatter.patch_frontmatter`, so every
mutation is a minimal in-place text edit and re-applying the same
``(field, value)`` yields byte-identical text.

The read accessors here are the single authority on a document's archived,
pinned and priority state; the query engine and the update service both
use them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from memoctl.domain.frontmatter import patch_frontmatter

PRIORITY_MIN = 0
PRIORITY_MAX = 5

ARCHIVED = "archived"
LEGACY_STATUS = "status"
PINNED = "pinned"
PRIORITY = "priority"


# ---------------------------------------------------------------------------
# Read accessors
# ---------------------------------------------------------------------------


def read_bool(fields: Mapping[str, Any], key: str) -> bool | None:
    """``True``/``False`` for a ``true``/``false`` value, None otherwise."""
    value = fields.get(key)
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def is_archived(fields: Mapping[str, Any]) -> bool:
    """Archived state.

    ``archived`` is canonical. ``status`` is only consulted when it is absent.
    """
    flag = read_bool(fields, ARCHIVED)
    if flag is not None:
        return flag
    status = fields.get(LEGACY_STATUS)
    return isinstance(status, str) and status.strip() == "archived"


def is_pinned(fields: Mapping[str, Any]) -> bool:
    return read_bool(fields, PINNED) is True


def read_priority(fields: Mapping[str, Any]) -> int:
    """Priority as an integer in ``[0, 5]``; absent or unreadable means 0."""
    value = fields.get(PRIORITY)
    if not isinstance(value, str):
        return PRIORITY_MIN
    try:
        number = int(value.strip())
    except ValueError:
        return PRIORITY_MIN
    return min(max(number, PRIORITY_MIN), PRIORITY_MAX)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def set_boolean_flag(text: str, field: str, value: bool) -> str:
    """Write a boolean field.

    Setting ``archived`` also writes the legacy ``status`` field
    (``archived`` / ``active``) so the two never disagree after a write.
    """
    updated = patch_frontmatter(text, field, value)
    if field == ARCHIVED:
        updated = patch_frontmatter(updated, LEGACY_STATUS, "archived" if value else "active")
    return updated


def set_integer_field(text: str, field: str, value: int) -> str:
    """Write a raw integer. Range checks are the caller's job."""
    return patch_frontmatter(text, field, int(value))


def validate_priority(value: int) -> bool:
    return PRIORITY_MIN <= value <= PRIORITY_MAX


def next_priority(current: int, star: int) -> int:
    """Priority after clicking star *star* (1-5) at priority *current*.

    Clicking the currently-filled top star steps down by one; any other star
    jumps straight to its index.

    >>> next_priority(3, 3), next_priority(3, 5), next_priority(3, 1)
    (2, 5, 1)
    """
    if not 1 <= star <= PRIORITY_MAX:
        msg = f"Star index must be between 1 and {PRIORITY_MAX}, got {star}"
        raise ValueError(msg)
    if star == current:
        return max(PRIORITY_MIN, star - 1)
    return star
