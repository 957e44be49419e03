"""Command: promote a document into its topic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from memoctl.commands._base import MemoCommand
from memoctl.services.topic import TopicService

if TYPE_CHECKING:
    from memoctl.commands._context import AppContext


@click.command(
    cls=MemoCommand,
    examples="""\
  memoctl promote Archives/Notifications/2025/2025-03/2025-03-29/x.md
  memoctl --json promote Archives/Notifications/2025/2025-03/2025-03-30/y.md""",
)
@click.argument("path")
@click.pass_obj
def promote(app: AppContext, path: str) -> None:
    """Copy PATH into its topic, or append its body to an existing topic.

    The topic is named after the document's context and lives in the
    [topics] folder. A notification document records the change.
    """
    app.run(TopicService(app.vault).promote, path)
