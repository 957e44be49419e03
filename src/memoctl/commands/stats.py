"""Command: activity statistics and heatmap."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from memoctl.commands._base import MemoCommand
from memoctl.services.stats import StatsService

if TYPE_CHECKING:
    from memoctl.commands._context import AppContext


@click.command(
    cls=MemoCommand,
    examples="""\
  memoctl stats
  memoctl -v stats      # also lists per-day counts
  memoctl --json stats""",
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Document counts and a 12-week activity heatmap."""
    app.run(StatsService(app.vault).activity)
