"""Locate and load ``memoctl.toml``.

Lookup order: an explicit path (``--config``), then ``$MEMOCTL_CONFIG``,
then the first ``memoctl.toml`` found walking up from the working
directory. The directory holding the file is the vault root.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

import click

from memoctl.config.models import MemoConfig

CONFIG_FILENAME = "memoctl.toml"
CONFIG_ENV_VAR = "MEMOCTL_CONFIG"


def find_config(start: Path | None = None, *, explicit: str | Path | None = None) -> Path | None:
    """Return the config file to use, or None when there is none.

    An *explicit* path or ``$MEMOCTL_CONFIG`` that does not point at a file
    yields None rather than falling back to the walk-up search.
    """
    override = explicit or os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override).expanduser()
        return candidate if candidate.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def vault_root_for(config_path: Path | None, fallback: Path | None = None) -> Path:
    """Vault root implied by *config_path*: its parent, else *fallback*, else cwd."""
    if config_path is not None:
        return config_path.resolve().parent
    return (fallback or Path.cwd()).resolve()


def load_config(path: Path | None = None, cwd: Path | None = None) -> MemoConfig:
    """Parse the TOML sections into a :class:`MemoConfig`.

    No environment or CLI merging happens here (see
    :class:`memoctl.config.settings.MemoSettings` for that). Defaults are
    returned when no file is found.
    """
    found = path or find_config(cwd)
    if found is None or not found.is_file():
        return MemoConfig()
    try:
        with found.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {found}: {exc}"
        raise click.ClickException(msg) from exc
    return MemoConfig.model_validate(data)
