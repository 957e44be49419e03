"""Rich Console factory and theme for memoctl output.

Consoles render into a StringIO buffer so every renderer keeps the
``format_result() -> str`` contract. Outside a terminal (tests, pipes)
Rich drops the color codes by itself.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MEMO_THEME = Theme(
    {
        "memo.ok": "bold green",
        "memo.error": "bold red",
        "memo.warning": "bold yellow",
        "memo.op": "bold cyan",
        "memo.key": "dim",
        "memo.path": "dim",
        "memo.context": "bold",
        "memo.star": "yellow",
        "memo.pinned": "bold magenta",
        "memo.archived": "dim italic",
        "memo.tag": "cyan",
        "memo.type.memo": "green",
        "memo.type.listify": "blue",
        "memo.type.deepDive": "magenta",
        "memo.type.article": "yellow",
        "memo.type.topic-notification": "cyan",
    }
)

# Heatmap shades, weakest to strongest.
HEAT_STYLES = ("grey23", "green4", "green3", "green1", "bold bright_green")


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Console writing to an in-memory buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Fixed width, for stable test output.
    """
    return Console(
        file=StringIO(),
        theme=MEMO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Text rendered so far into a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(doc_type: str | None) -> str:
    """Theme style for a document type, or "" when it has none."""
    if not doc_type:
        return ""
    name = f"memo.type.{doc_type}"
    return name if name in MEMO_THEME.styles else ""
