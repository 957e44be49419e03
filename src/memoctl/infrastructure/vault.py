"""Vault — the single dependency injected into every service.

The Vault owns the document repository and, lazily, the text generator.
Nothing is indexed or cached between calls: files under the vault root
are the only state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from memoctl.infrastructure.filesystem import DocumentRepository
from memoctl.infrastructure.generation import TextGenerator, build_generator
from memoctl.infrastructure.templates import render_prompt

if TYPE_CHECKING:
    from memoctl.config.settings import MemoSettings

logger = logging.getLogger(__name__)


class Vault:
    """Repository plus collaborators for one vault root.

    Constructed once per CLI invocation from :class:`MemoSettings` and
    stored on the click context. Services receive it through
    :class:`BaseService`.

    A *generator* may be injected (tests do this); otherwise one is built
    from ``[generation]`` the first time it is needed, so commands that
    never generate never need an API key.
    """

    def __init__(self, settings: MemoSettings, *, generator: TextGenerator | None = None) -> None:
        self._settings = settings
        self._repository = DocumentRepository(settings.vault_root)
        self._generator = generator

    @property
    def root(self) -> Path:
        """The vault root directory."""
        return self._settings.vault_root

    @property
    def settings(self) -> MemoSettings:
        return self._settings

    @property
    def repository(self) -> DocumentRepository:
        return self._repository

    @property
    def notification_folder(self) -> str:
        return self._settings.vault.notification_folder.strip("/")

    @property
    def topics_folder(self) -> str:
        return self._settings.topics.folder.strip("/")

    @property
    def generator(self) -> TextGenerator:
        """The configured text generator.

        Raises :class:`~memoctl.infrastructure.generation.GenerationError`
        when the selected provider has no API key.
        """
        if self._generator is None:
            self._generator = build_generator(self._settings.generation)
            logger.debug("Using %s generator", self._settings.generation.provider)
        return self._generator

    def render_prompt(self, name: str, **context: str) -> str:
        """Render a prompt template, honouring overrides in this vault."""
        return render_prompt(name, vault_root=self.root, **context)
