"""MemoSettings — CLI flags, environment and ``memoctl.toml`` in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``MEMOCTL_*`` prefix, ``__`` for nesting
     (``MEMOCTL_GENERATION__OPENAI_API_KEY``)
  3. TOML file    — ``memoctl.toml`` found by :func:`find_config`
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from memoctl.config.discovery import find_config, vault_root_for
from memoctl.config.models import GenerationConfig, QueryConfig, TopicsConfig, VaultConfig

# TOML file for the settings object under construction.
_pending_toml: ContextVar[Path | None] = ContextVar("memoctl_pending_toml", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Sections read from a ``memoctl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class MemoSettings(BaseSettings):
    """Resolved settings for one CLI invocation.

    Attributes:
        vault_root: Directory holding ``memoctl.toml`` (or the cwd when
            there is none). All document paths are relative to it.
        config_path: The config file actually used, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MEMOCTL_",
        "env_nested_delimiter": "__",
    }

    vault_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    vault: VaultConfig = Field(default_factory=VaultConfig)
    topics: TopicsConfig = Field(default_factory=TopicsConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """TOML sits between env vars and defaults; dotenv and secrets are unused."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _pending_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        vault_root: Path | None = None,
        **cli_flags: Any,
    ) -> MemoSettings:
        """Discover the config file and build settings with *cli_flags* on top."""
        toml_path = find_config(vault_root, explicit=config_path)
        root = vault_root.resolve() if vault_root is not None else vault_root_for(toml_path)

        token = _pending_toml.set(toml_path)
        try:
            return cls(vault_root=root, config_path=toml_path, **cli_flags)
        finally:
            _pending_toml.reset(token)
