"""Activity statistics — day buckets, the 7x12 heatmap and summary counters.

The heatmap is laid out purely from *today*: each cell is mapped back to a
calendar date through weeks-ago / day-of-week arithmetic, then looked up in
the day buckets. Rows are weekdays (Sunday first), columns are weeks (oldest
on the left, the current week on the right).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from memoctl.domain.document import Document
from memoctl.domain.timestamps import day_key

GRID_DAYS = 7
GRID_WEEKS = 12
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Raw-text markers for the archived counter. Deliberately not the parsed
# field: malformed headers still count, coincidental body text does too.
_ARCHIVED_MARKERS = ("archived: true", "status: archived")

_MIN_INTENSITY = 0.3


@dataclass(frozen=True)
class HeatmapCell:
    day: date
    count: int
    intensity: float


@dataclass(frozen=True)
class ActivitySummary:
    total: int
    archived: int
    active: int
    active_days: int
    total_chars: int
    mean_chars_per_day: int


def bucket_by_day(documents: Sequence[Document]) -> dict[str, int]:
    """``YYYYMMDD -> count`` over the effective dates of *documents*."""
    return dict(Counter(day_key(doc.effective_date) for doc in documents))


def sunday_index(day: date) -> int:
    """Day of week with Sunday as 0."""
    return (day.weekday() + 1) % 7


def grid_date(today: date, weekday: int, week: int) -> date:
    """Calendar date of the cell at row *weekday* (0=Sun) and column *week*.

    Column ``GRID_WEEKS - 1`` is the current week. Cells later than today in
    the current week resolve to future dates and simply stay empty.
    """
    weeks_ago = GRID_WEEKS - 1 - week
    days_ago = weeks_ago * GRID_DAYS + sunday_index(today) - weekday
    return today - timedelta(days=days_ago)


def cell_intensity(count: int, max_count: int) -> float:
    """0 for an empty day, otherwise linear in ``count / max_count`` from 0.3 to 1."""
    if count <= 0:
        return 0.0
    ratio = count / max(max_count, 1)
    return min(_MIN_INTENSITY + ratio * (1 - _MIN_INTENSITY), 1.0)


def build_heatmap(counts: Mapping[str, int], today: date) -> list[list[HeatmapCell]]:
    """Seven rows of twelve cells, zero-filled.

    Intensity is scaled by the largest count inside the visible window,
    not across the whole corpus.
    """
    days = [
        [grid_date(today, weekday, week) for week in range(GRID_WEEKS)]
        for weekday in range(GRID_DAYS)
    ]
    window_max = max(
        (counts.get(f"{day:%Y%m%d}", 0) for row in days for day in row),
        default=0,
    )
    return [
        [
            HeatmapCell(
                day=day,
                count=counts.get(f"{day:%Y%m%d}", 0),
                intensity=cell_intensity(counts.get(f"{day:%Y%m%d}", 0), window_max),
            )
            for day in row
        ]
        for row in days
    ]


def looks_archived(text: str) -> bool:
    return any(marker in text for marker in _ARCHIVED_MARKERS)


def summarize(documents: Sequence[Document]) -> ActivitySummary:
    """Totals, archived/active split, active days and character counts."""
    archived = sum(1 for doc in documents if looks_archived(doc.text))
    total_chars = sum(len(doc.text) for doc in documents)
    active_days = len(bucket_by_day(documents))
    mean = int(total_chars / active_days + 0.5) if active_days else 0
    return ActivitySummary(
        total=len(documents),
        archived=archived,
        active=len(documents) - archived,
        active_days=active_days,
        total_chars=total_chars,
        mean_chars_per_day=mean,
    )
