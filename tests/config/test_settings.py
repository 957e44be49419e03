"""Tests for MemoSettings — the CLI, env and TOML priority chain."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from memoctl.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME
from memoctl.config.settings import MemoSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("MEMOCTL_GENERATION__PROVIDER", raising=False)
    monkeypatch.delenv("MEMOCTL_VAULT__NOTIFICATION_FOLDER", raising=False)


def _write_config(root: Path, text: str) -> Path:
    path = root / CONFIG_FILENAME
    path.write_text(text, encoding="utf-8")
    return path


class TestMemoSettings:
    def test_defaults(self, tmp_path: Path) -> None:
        settings = MemoSettings.from_cli(vault_root=tmp_path)
        assert settings.vault_root == tmp_path.resolve()
        assert settings.config_path is None
        assert settings.vault.notification_folder == "Archives/Notifications"
        assert settings.topics.fallback_label == "Deep Dive"
        assert settings.query.preview_lines == 3

    def test_toml_section(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[topics]\nfolder = "Subjects"\n')
        settings = MemoSettings.from_cli(vault_root=tmp_path)
        assert settings.topics.folder == "Subjects"
        assert settings.config_path == tmp_path.resolve() / CONFIG_FILENAME

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, '[vault]\nnotification_folder = "FromToml"\n')
        monkeypatch.setenv("MEMOCTL_VAULT__NOTIFICATION_FOLDER", "FromEnv")
        settings = MemoSettings.from_cli(vault_root=tmp_path)
        assert settings.vault.notification_folder == "FromEnv"

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = MemoSettings.from_cli(vault_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True
        assert settings.quiet is False

    def test_vault_root_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_config(tmp_path, "")
        nested = tmp_path / "sub"
        nested.mkdir()
        monkeypatch.chdir(nested)
        settings = MemoSettings.from_cli()
        assert settings.vault_root == tmp_path.resolve()

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        config = tmp_path / "custom.toml"
        config.write_text('[query]\npreview_lines = 1\n', encoding="utf-8")
        settings = MemoSettings.from_cli(config_path=str(config))
        assert settings.query.preview_lines == 1
        assert settings.vault_root == tmp_path.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[vault\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            MemoSettings.from_cli(vault_root=tmp_path)

    def test_api_key_from_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[generation]\nprovider = "claude"\nclaude_api_key = "k"\n')
        settings = MemoSettings.from_cli(vault_root=tmp_path)
        assert settings.generation.api_key() == "k"
