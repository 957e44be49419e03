"""Subcommand modules for memoctl.

:func:`register_commands` imports each module only when the root group is
built, keeping ``memoctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach the two groups and the standalone commands to the root group."""
    # --- Groups ---
    from memoctl.commands.create import create
    from memoctl.commands.query import query

    cli.add_command(create)
    cli.add_command(query)

    # --- Standalone commands ---
    from memoctl.commands.promote import promote
    from memoctl.commands.stats import stats
    from memoctl.commands.update import archive, delete, pin, priority, star, unarchive

    for command in (archive, unarchive, pin, priority, star, delete, promote, stats):
        cli.add_command(command)
