"""Adapt a ServiceResult to the requested output mode.

Three modes, picked in this order:

- ``--json``: the full result as indented JSON
- ``--quiet``: bare paths or text, one per line, for piping
- default: operation-specific Rich rendering
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from memoctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from memoctl.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags taken from the root command."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Render *result* according to *settings* (human mode by default)."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
