"""Shared service-layer helper functions."""

from __future__ import annotations

from memoctl.domain.links import replace_with_target
from memoctl.domain.naming import first_line


def storage_message(exc: OSError) -> str:
    """Short user-facing text for a storage failure."""
    reason = exc.strerror or exc.__class__.__name__
    return f"{reason}: {exc.filename}" if exc.filename else str(exc) or reason


def title_for(stem: str) -> str:
    """Reference title shown to the generator: the stem with links unwrapped."""
    return replace_with_target(stem)


def parse_checklist(completion: str) -> list[str]:
    """Items of every ``- [ ]`` line in *completion*, marker removed.

    Examples:
        >>> parse_checklist("Sure!\\n- [ ] Back up weekly\\n  - [ ]  Share notes \\nDone")
        ['Back up weekly', 'Share notes']
    """
    items: list[str] = []
    for line in completion.split("\n"):
        stripped = line.strip()
        if not stripped.startswith("- [ ]"):
            continue
        item = stripped[len("- [ ]") :].strip()
        if item:
            items.append(item)
    return items


def is_blank(text: str | None) -> bool:
    return text is None or not text.strip()


def headline(text: str) -> str:
    """First line of *text*, for log messages."""
    return first_line(text)[:60]
