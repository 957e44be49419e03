"""AppContext — shared Click context for all commands.

Created once by the root group and passed down with ``@click.pass_obj``.
It configures logging, builds the Vault lazily, drives async services with
:func:`anyio.run`, and routes results to stdout or stderr.
"""

from __future__ import annotations

import sys
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

import anyio
import click

from memoctl.config.logging import configure_logging
from memoctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from memoctl.config.settings import MemoSettings
    from memoctl.infrastructure.vault import Vault
    from memoctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The vault is created on first access, so ``--help``, ``--examples`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: MemoSettings) -> None:
        self.settings = settings
        self._vault: Vault | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            from memoctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def vault(self) -> Vault:
        if self._vault is None:
            from memoctl.infrastructure.vault import Vault

            self._vault = Vault(self.settings)
        return self._vault

    def run(self, func: Callable[..., Awaitable[ServiceResult]], *args: Any, **kwargs: Any) -> None:
        """Await ``func(*args, **kwargs)`` on a fresh event loop and emit the result."""

        async def _call() -> ServiceResult:
            return await func(*args, **kwargs)

        self.emit(anyio.run(_call))

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult with the right stream and exit status.

        * Success: stdout, normal return. Warnings go to stderr (they are
          part of the payload in JSON mode).
        * Failure: stderr, exit status 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)


def read_text_argument(value: str) -> str:
    """``-`` means read the text from stdin."""
    if value == "-":
        return sys.stdin.read()
    return value
