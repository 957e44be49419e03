"""Command group: memo, checklist, deep-dive and article creation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from memoctl.commands._base import MemoGroup
from memoctl.commands._context import read_text_argument
from memoctl.services.create import CreateService

if TYPE_CHECKING:
    from memoctl.commands._context import AppContext

_CREATE_EXAMPLES = """\
  memoctl create memo "Plan A: move the standup to 10am #team"
  memoctl create memo "Follow-up on [[Roadmap]]" --source Topics/Roadmap.md
  memoctl create listify "Prepare the release" --reference Notes/release.md
  memoctl create deep-dive "What matters for onboarding" --reference Notes/call.md
  memoctl create article "Notes on the offsite"
  echo "Long memo text" | memoctl create memo -"""

_REFERENCE_HELP = "Vault path of the reference document."


@click.group(cls=MemoGroup, examples=_CREATE_EXAMPLES)
@click.pass_obj
def create(app: AppContext) -> None:
    """Create memos, checklists, deep dives and articles."""


@create.command(
    examples="""\
  memoctl create memo "Buy a new notebook"
  memoctl create memo "Idea for [[Roadmap]] #planning"
  memoctl create memo "Reply to this" --source Topics/Inbox.md
  memoctl --json create memo -"""
)
@click.argument("text")
@click.option("--source", default=None, help="Vault path of a document this memo refers to.")
@click.pass_obj
def memo(app: AppContext, text: str, source: str | None) -> None:
    """Save TEXT as a memo (use - to read stdin)."""
    svc = CreateService(app.vault)
    app.run(svc.create_memo, read_text_argument(text), source=source)


@create.command(
    examples="""\
  memoctl create listify "Prepare the release" --reference Notes/release.md
  memoctl create listify "Habits from [[Atomic Habits]]" --reference Books/habits.md"""
)
@click.argument("text")
@click.option("--reference", default=None, help=_REFERENCE_HELP)
@click.pass_obj
def listify(app: AppContext, text: str, reference: str | None) -> None:
    """Generate a checklist about TEXT from the reference material."""
    svc = CreateService(app.vault)
    app.run(svc.create_listify, read_text_argument(text), reference=reference)


@create.command(
    name="deep-dive",
    examples="""\
  memoctl create deep-dive "Key decisions" --reference Notes/meeting.md
  memoctl create deep-dive "Compare [[Plan A]] and [[Plan B]]" --reference Notes/plans.md""",
)
@click.argument("text")
@click.option("--reference", default=None, help=_REFERENCE_HELP)
@click.pass_obj
def deep_dive(app: AppContext, text: str, reference: str | None) -> None:
    """Generate a summary of the reference material in the context of TEXT."""
    svc = CreateService(app.vault)
    app.run(svc.create_deep_dive, read_text_argument(text), reference=reference)


@create.command(
    examples="""\
  memoctl create article "Notes on the offsite"
  memoctl create article "Response" --source Topics/Plan\\ A.md"""
)
@click.argument("text")
@click.option("--source", default=None, help="Vault path of the document this article answers.")
@click.pass_obj
def article(app: AppContext, text: str, source: str | None) -> None:
    """Start a hand-written article seeded with TEXT."""
    svc = CreateService(app.vault)
    app.run(svc.create_article, read_text_argument(text), source=source)
