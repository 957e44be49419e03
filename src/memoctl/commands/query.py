"""Command group: listing, detail, references and share text."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from memoctl.commands._base import MemoGroup
from memoctl.domain.types import DocType
from memoctl.services.query import QueryService

if TYPE_CHECKING:
    from memoctl.commands._context import AppContext

_QUERY_EXAMPLES = """\
  memoctl query list
  memoctl query list --archived --keyword "#project"
  memoctl query list --date 2025-03-29 --type listify
  memoctl query list --priority 4 --priority 5
  memoctl query get Archives/Notifications/2025/2025-03/2025-03-29/x.md
  memoctl query refs Topics/Plan\\ A.md
  memoctl -q query share Topics/Plan\\ A.md"""


@click.group(cls=MemoGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """List, inspect and share documents."""


@query.command(
    name="list",
    examples="""\
  memoctl query list
  memoctl query list --archived
  memoctl query list --keyword "#プロジェクト"
  memoctl query list --date 2025-03-29
  memoctl query list --type deepDive --priority 5
  memoctl -q query list --type memo""",
)
@click.option("--archived", "show_archived", is_flag=True, help="Include archived documents.")
@click.option("--keyword", default=None, help="Only documents containing this #hashtag.")
@click.option(
    "--date",
    "search_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Only documents from this day (YYYY-MM-DD).",
)
@click.option(
    "--type",
    "doc_type",
    type=click.Choice([t.value for t in DocType]),
    default=None,
    help="Only documents of this type.",
)
@click.option(
    "--priority",
    "priorities",
    type=click.IntRange(0, 5),
    multiple=True,
    help="Only documents with this priority (repeatable).",
)
@click.pass_obj
def list_cmd(
    app: AppContext,
    show_archived: bool,
    keyword: str | None,
    search_date: datetime | None,
    doc_type: str | None,
    priorities: tuple[int, ...],
) -> None:
    """List documents, pinned first, newest first."""
    svc = QueryService(app.vault)
    app.run(
        svc.list_documents,
        show_archived=show_archived,
        keyword=keyword,
        search_date=search_date.date() if search_date else None,
        doc_type=doc_type,
        priorities=priorities,
    )


@query.command(
    examples="""\
  memoctl query get Archives/Notifications/2025/2025-03/2025-03-29/x.md
  memoctl --json query get Topics/Roadmap.md"""
)
@click.argument("path")
@click.pass_obj
def get(app: AppContext, path: str) -> None:
    """Show one document: parsed fields, flags and body."""
    app.run(QueryService(app.vault).get, path)


@query.command(
    examples="""\
  memoctl query refs Topics/Roadmap.md
  memoctl --json query refs Archives/Notifications/2025/2025-03/2025-03-29/x.md"""
)
@click.argument("path")
@click.pass_obj
def refs(app: AppContext, path: str) -> None:
    """Backlinks, frontlinks and documents sharing a hashtag with PATH."""
    app.run(QueryService(app.vault).references, path)


@query.command(
    examples="""\
  memoctl query share Topics/Roadmap.md
  memoctl -q query share Topics/Roadmap.md | pbcopy"""
)
@click.argument("path")
@click.pass_obj
def share(app: AppContext, path: str) -> None:
    """Print PATH as [[name]] followed by its body, ready to paste."""
    app.run(QueryService(app.vault).share, path)
