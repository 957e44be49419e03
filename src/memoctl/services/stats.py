"""StatsService — day buckets, the activity heatmap and summary counters."""

from __future__ import annotations

from dataclasses import asdict

from memoctl.domain.activity import (
    GRID_WEEKS,
    WEEKDAY_LABELS,
    bucket_by_day,
    build_heatmap,
    summarize,
)
from memoctl.services.base import BaseService
from memoctl.services.result import ServiceResult
from memoctl.services.telemetry import trace_span, traced


class StatsService(BaseService):
    """Activity over every document in the notification folder, archived or not."""

    @traced
    async def activity(self) -> ServiceResult:
        op = "stats"
        corpus, warnings = await self._corpus()
        today = self._now().date()

        with trace_span("aggregate"):
            buckets = bucket_by_day(corpus)
            grid = build_heatmap(buckets, today)
            summary = summarize(corpus)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "today": today.isoformat(),
                "summary": asdict(summary),
                "days": dict(sorted(buckets.items())),
                "weekdays": list(WEEKDAY_LABELS),
                "weeks": GRID_WEEKS,
                "grid": [
                    [
                        {
                            "date": cell.day.isoformat(),
                            "count": cell.count,
                            "intensity": round(cell.intensity, 3),
                        }
                        for cell in row
                    ]
                    for row in grid
                ],
            },
            warnings=warnings,
        )
