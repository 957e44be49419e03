"""TopicService — promote a document into its topic aggregate.

The topic key is the source's ``context`` (or the configured fallback
label) with ``< > : " / \\ | ? *`` replaced by ``-``. The first promotion
for a key copies the source verbatim, frontmatter included; later ones
append the source body after a ``---`` separator and never touch the
topic's frontmatter.

The topic write and the notification write are not atomic. A missing
notification after a successful topic write is reported as a warning.
"""

from __future__ import annotations

import logging

from memoctl.domain.frontmatter import strip_frontmatter
from memoctl.domain.naming import topic_key
from memoctl.services._helpers import storage_message
from memoctl.services.base import BaseService
from memoctl.services.create import SECTION_SEPARATOR, CreateService
from memoctl.services.result import ErrorCode, ServiceResult
from memoctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class TopicService(BaseService):
    """Aggregates promoted documents into ``<topics folder>/<key>.md``."""

    @traced
    async def promote(self, path: str) -> ServiceResult:
        op = "promote"
        try:
            source = await self._repo.read_document(path)
        except UnicodeDecodeError:
            return ServiceResult.failure(
                op, ErrorCode.STORAGE_ERROR, f"{path} is not valid UTF-8", path=path
            )
        except (FileNotFoundError, IsADirectoryError, ValueError):
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"No document at {path}", path=path
            )

        context = source.context or self._vault.settings.topics.fallback_label
        key = topic_key(context)
        target = f"{self._vault.topics_folder}/{key}.md"

        try:
            with trace_span("write_topic"):
                updated = await self._repo.exists(target)
                if updated:
                    current = await self._repo.read(target)
                    addition = strip_frontmatter(source.text)
                    await self._repo.modify(target, f"{current}{SECTION_SEPARATOR}{addition}")
                else:
                    await self._repo.copy(path, target)
        except FileExistsError:
            return ServiceResult.failure(
                op,
                ErrorCode.ALREADY_EXISTS,
                f"Topic appeared while promoting: {target}",
                path=target,
            )
        except (FileNotFoundError, ValueError):
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"Document vanished while promoting: {path}", path=path
            )
        except OSError as exc:
            return ServiceResult.failure(
                op, ErrorCode.STORAGE_ERROR, storage_message(exc), path=target
            )

        logger.info("%s topic %s from %s", "Updated" if updated else "Created", target, path)

        warnings: list[str] = []
        notification = await CreateService(self._vault).create_topic_notification(
            context, updated=updated
        )
        if not notification.ok and notification.error is not None:
            warnings.append(f"Topic notification not written: {notification.error.message}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "source": path,
                "topic": target,
                "key": key,
                "context": context,
                "updated": updated,
                "notification": notification.data.get("path"),
            },
            warnings=warnings,
        )
