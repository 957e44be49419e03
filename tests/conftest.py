"""Shared pytest fixtures for memoctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from memoctl.config.logging import LOGGER_NAME
from memoctl.config.settings import MemoSettings
from memoctl.infrastructure.generation import GenerationError
from memoctl.infrastructure.vault import Vault

NOTIFICATIONS = "Archives/Notifications"


class FakeGenerator:
    """Canned completions; records every prompt it was given."""

    def __init__(self, completion: str = "- [ ] First step\n- [ ] Second step") -> None:
        self.completion = completion
        self.error: str | None = None
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise GenerationError(self.error)
        return self.completion


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the handler and levels each CLI invocation installs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    memo_level = logging.getLogger(LOGGER_NAME).level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger(LOGGER_NAME).setLevel(memo_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Empty vault directory. All vault fixtures build on this."""
    return tmp_path


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def vault(vault_root: Path, generator: FakeGenerator) -> Vault:
    """Vault on a temp directory with the fake generator injected."""
    settings = MemoSettings.from_cli(vault_root=vault_root)
    return Vault(settings, generator=generator)


@pytest.fixture
def _isolated_vault(vault_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp vault root so the CLI uses an isolated vault.

    Use via ``@pytest.mark.usefixtures("_isolated_vault")`` on command test
    classes.
    """
    monkeypatch.delenv("MEMOCTL_CONFIG", raising=False)
    monkeypatch.chdir(vault_root)


@pytest.fixture
def write_doc(vault_root: Path) -> Callable[[str, str], str]:
    """Write a document at a vault path, creating folders. Returns the path."""

    def _write(path: str, text: str) -> str:
        target = vault_root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        return path

    return _write
