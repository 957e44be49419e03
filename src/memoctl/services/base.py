"""BaseService — shared plumbing for every memoctl service.

Services receive a :class:`Vault` at construction time and reach storage
only through ``self._vault.repository``. Each public method is a coroutine
returning a :class:`ServiceResult`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from memoctl.domain.timestamps import format_timestamp, now_local, resolve_path
from memoctl.services.telemetry import get_current_span

if TYPE_CHECKING:
    from memoctl.domain.document import Document
    from memoctl.infrastructure.filesystem import DocumentRepository
    from memoctl.infrastructure.vault import Vault

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class UpdateService(BaseService):
            async def archive(self, path: str) -> ServiceResult:
                text = await self._repo.read(path)
                ...
    """

    def __init__(self, vault: Vault) -> None:
        self._vault = vault

    @property
    def _repo(self) -> DocumentRepository:
        return self._vault.repository

    def _date_folder(self, when: datetime) -> str:
        """Notification date folder for *when*."""
        return resolve_path(self._vault.notification_folder, when)

    def _file_timestamp(self, when: datetime) -> str:
        return format_timestamp(self._vault.settings.vault.timestamp_format, when)

    def _now(self) -> datetime:
        return now_local()

    async def _corpus(self, folder: str | None = None) -> tuple[list[Document], list[str]]:
        """Documents under *folder* (default: the notification folder), freshly read.

        The second element holds one warning per file that could not be
        decoded.
        """
        if folder is None:
            folder = self._vault.notification_folder
        scan = await self._repo.scan_documents(folder)
        logger.debug("Loaded %d documents", len(scan.documents))

        span = get_current_span()
        if span is not None:
            span.annotate("documents", len(scan.documents))
            if scan.unreadable:
                span.annotate("unreadable", len(scan.unreadable))

        warnings = [f"Skipped {path}: not valid UTF-8" for path in scan.unreadable]
        return scan.documents, warnings
