"""Document model — path, raw text, parsed frontmatter and body.

A Document is a read snapshot. Mutations never go through it; they patch
the raw text (see :mod:`memoctl.domain.metadata`) and the repository
writes the result back.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from memoctl.domain.frontmatter import FrontmatterValue, parse_frontmatter
from memoctl.domain.metadata import is_archived, is_pinned, read_priority
from memoctl.domain.timestamps import parse_created, resolve_effective_date


class Document(BaseModel):
    """A single text document in the vault."""

    model_config = {"frozen": True}

    path: str
    text: str
    frontmatter: dict[str, FrontmatterValue] = Field(default_factory=dict)
    body: str = ""
    mtime: float | None = None

    @classmethod
    def from_text(cls, path: str, text: str, *, mtime: float | None = None) -> Document:
        fm, body = parse_frontmatter(text)
        return cls(path=path, text=text, frontmatter=fm, body=body, mtime=mtime)

    # -- naming --------------------------------------------------------

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def stem(self) -> str:
        name = self.name
        return name[:-3] if name.endswith(".md") else name

    # -- fields --------------------------------------------------------

    def scalar(self, key: str) -> str | None:
        value = self.frontmatter.get(key)
        return value if isinstance(value, str) else None

    @property
    def doc_type(self) -> str | None:
        return self.scalar("type")

    @property
    def context(self) -> str | None:
        return self.scalar("context") or None

    @property
    def created(self) -> datetime | None:
        return parse_created(self.scalar("created"))

    @property
    def links(self) -> list[str]:
        value = self.frontmatter.get("links")
        return list(value) if isinstance(value, list) else []

    @property
    def archived(self) -> bool:
        return is_archived(self.frontmatter)

    @property
    def pinned(self) -> bool:
        return is_pinned(self.frontmatter)

    @property
    def priority(self) -> int:
        return read_priority(self.frontmatter)

    # -- dates ---------------------------------------------------------

    @property
    def effective_date(self) -> datetime:
        return resolve_effective_date(self.scalar("created"), self.path, self.mtime)

    @property
    def calendar_day(self) -> date:
        return self.effective_date.date()

    def preview(self, lines: int = 3) -> str:
        """First *lines* non-empty body lines."""
        kept = [line for line in self.body.strip().split("\n") if line.strip()]
        return "\n".join(kept[:lines])

    def summary(self) -> dict[str, Any]:
        """JSON-friendly listing row."""
        return {
            "path": self.path,
            "type": self.doc_type,
            "context": self.context,
            "date": self.effective_date.isoformat(),
            "pinned": self.pinned,
            "archived": self.archived,
            "priority": self.priority,
        }
