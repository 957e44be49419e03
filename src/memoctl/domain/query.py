"""Query engine — filter and sort the whole document set.

The engine is handed every document under the notification folder on each
call and a frozen :class:`QueryState`; there is no index and no global
filter state.

Ordering: pinned documents first, then descending effective date. Ties keep
enumeration order (Python's sort is stable).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from pydantic import BaseModel, Field, field_validator

from memoctl.domain.document import Document
from memoctl.domain.metadata import PRIORITY_MAX, PRIORITY_MIN
from memoctl.domain.tags import collect_hashtags


class QueryState(BaseModel):
    """Transient search/filter state for one query pass."""

    model_config = {"frozen": True}

    show_archived: bool = False
    search_keyword: str | None = None
    search_date: date | None = None
    search_type: str | None = None
    selected_priorities: frozenset[int] = Field(default_factory=frozenset)

    @field_validator("selected_priorities")
    @classmethod
    def _priorities_in_range(cls, value: frozenset[int]) -> frozenset[int]:
        bad = sorted(p for p in value if not PRIORITY_MIN <= p <= PRIORITY_MAX)
        if bad:
            msg = f"Priorities must be between {PRIORITY_MIN} and {PRIORITY_MAX}: {bad}"
            raise ValueError(msg)
        return value


@dataclass(frozen=True)
class QueryOutcome:
    """Filtered, ordered documents plus the option lists for the filters."""

    documents: list[Document]
    total: int
    hashtags: list[str] = field(default_factory=list)
    dates: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.documents)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def matches(doc: Document, state: QueryState) -> bool:
    """True when *doc* passes every active filter in *state*."""
    if doc.archived and not state.show_archived:
        return False

    keyword = state.search_keyword
    if keyword and keyword.startswith("#") and keyword.lower() not in doc.text.lower():
        return False

    if state.search_date is not None and doc.calendar_day != state.search_date:
        return False

    if state.search_type and f"type: {state.search_type}" not in doc.text:
        return False

    return not (state.selected_priorities and doc.priority not in state.selected_priorities)


def sort_documents(documents: Sequence[Document]) -> list[Document]:
    """Pinned first, then newest first. Stable for equal keys."""
    return sorted(
        documents,
        key=lambda doc: (not doc.pinned, -doc.effective_date.timestamp()),
    )


def distinct_days(documents: Sequence[Document]) -> list[str]:
    """Calendar days present in *documents*, newest first, as ``YYYY-MM-DD``."""
    return sorted({doc.calendar_day.isoformat() for doc in documents}, reverse=True)


def run_query(documents: Sequence[Document], state: QueryState) -> QueryOutcome:
    """Filter and order *documents*.

    The hashtag and day option lists are computed over the unfiltered
    corpus so the filter choices never shrink to the current selection.
    """
    ordered = sort_documents(documents)
    return QueryOutcome(
        documents=[doc for doc in ordered if matches(doc, state)],
        total=len(documents),
        hashtags=collect_hashtags(doc.text for doc in documents),
        dates=distinct_days(documents),
    )
