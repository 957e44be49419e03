"""memoctl entry point: the root command group and its output/config flags."""

from __future__ import annotations

import click

from memoctl import __version__
from memoctl.commands import register_commands
from memoctl.commands._context import AppContext
from memoctl.config.settings import MemoSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="memoctl")
@click.option("--json", "json_output", is_flag=True, help="Print results as a JSON envelope.")
@click.option(
    "-q", "--quiet", is_flag=True, help="Print only document paths, or the raw share text."
)
@click.option(
    "-v", "--verbose", is_flag=True, help="Debug logs, previews and a timing tree per command."
)
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="memoctl.toml to use; its folder becomes the vault root.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Capture memos, checklists and deep dives as markdown files, then
    filter, rate, archive and promote them into topic documents.

    The vault is the folder holding memoctl.toml (searched upward from the
    working directory), or the working directory itself.
    """
    ctx.obj = AppContext(
        MemoSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
