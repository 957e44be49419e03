"""Standalone commands: archive, unarchive, pin, priority, star, delete."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from memoctl.commands._base import MemoCommand
from memoctl.services.update import UpdateService

if TYPE_CHECKING:
    from memoctl.commands._context import AppContext

_DOC = "Archives/Notifications/2025/2025-03/2025-03-29/x.md"


@click.command(
    cls=MemoCommand,
    examples=f"""\
  memoctl archive {_DOC}
  memoctl --json archive {_DOC}""",
)
@click.argument("path")
@click.pass_obj
def archive(app: AppContext, path: str) -> None:
    """Archive a document (soft delete: it drops out of the default listing)."""
    app.run(UpdateService(app.vault).archive, path)


@click.command(cls=MemoCommand, examples=f"  memoctl unarchive {_DOC}")
@click.argument("path")
@click.pass_obj
def unarchive(app: AppContext, path: str) -> None:
    """Bring an archived document back into the listing."""
    app.run(UpdateService(app.vault).unarchive, path)


@click.command(
    cls=MemoCommand,
    examples=f"""\
  memoctl pin {_DOC}
  memoctl pin {_DOC}   # again to unpin""",
)
@click.argument("path")
@click.pass_obj
def pin(app: AppContext, path: str) -> None:
    """Toggle the pinned flag. Pinned documents list first."""
    app.run(UpdateService(app.vault).toggle_pin, path)


@click.command(
    cls=MemoCommand,
    examples=f"""\
  memoctl priority {_DOC} 5
  memoctl priority {_DOC} 0""",
)
@click.argument("path")
@click.argument("value", type=int)
@click.pass_obj
def priority(app: AppContext, path: str, value: int) -> None:
    """Set the priority (0-5) directly."""
    app.run(UpdateService(app.vault).set_priority, path, value)


@click.command(
    cls=MemoCommand,
    examples=f"""\
  memoctl star {_DOC} 3   # priority 0 -> 3
  memoctl star {_DOC} 3   # priority 3 -> 2""",
)
@click.argument("path")
@click.argument("index", type=int)
@click.pass_obj
def star(app: AppContext, path: str, index: int) -> None:
    """Click star INDEX (1-5).

    Clicking the star matching the current priority lowers it by one; any
    other star sets the priority to INDEX.
    """
    app.run(UpdateService(app.vault).click_star, path, index)


@click.command(cls=MemoCommand, examples=f"  memoctl delete {_DOC} --yes")
@click.argument("path")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def delete(app: AppContext, path: str, yes: bool) -> None:
    """Delete a document file for good. Prefer archive for a soft delete."""
    if not yes and not app.settings.json_output:
        click.confirm(f"Delete {path}?", abort=True, err=True)
    app.run(UpdateService(app.vault).delete, path)
