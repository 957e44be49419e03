"""UpdateService — metadata mutations and deletion.

Pipeline: READ → PATCH → WRITE → RESPOND

Every mutation is a minimal frontmatter patch of the current file text;
the body is never rewritten. There is no locking: two racing mutations of
the same document resolve as last writer wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from memoctl.domain.frontmatter import parse_frontmatter
from memoctl.domain.metadata import (
    ARCHIVED,
    PINNED,
    PRIORITY,
    PRIORITY_MAX,
    PRIORITY_MIN,
    is_pinned,
    next_priority,
    read_priority,
    set_boolean_flag,
    set_integer_field,
    validate_priority,
)
from memoctl.services._helpers import storage_message
from memoctl.services.base import BaseService
from memoctl.services.result import ErrorCode, ServiceResult
from memoctl.services.telemetry import traced

logger = logging.getLogger(__name__)

# Text in, (patched text, response data) out.
Patch = Callable[[str], tuple[str, dict[str, Any]]]


class UpdateService(BaseService):
    """Archive, pin, prioritize and delete documents."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    async def archive(self, path: str) -> ServiceResult:
        return await self._set_archived("archive", path, value=True)

    @traced
    async def unarchive(self, path: str) -> ServiceResult:
        return await self._set_archived("unarchive", path, value=False)

    @traced
    async def toggle_pin(self, path: str) -> ServiceResult:
        """Flip the parsed ``pinned`` flag."""

        def patch(text: str) -> tuple[str, dict[str, Any]]:
            pinned = not is_pinned(parse_frontmatter(text)[0])
            return set_boolean_flag(text, PINNED, pinned), {"pinned": pinned}

        return await self._mutate("toggle_pin", path, patch)

    @traced
    async def set_priority(self, path: str, value: int) -> ServiceResult:
        """Write ``priority`` directly. Values outside 0-5 are rejected."""
        op = "set_priority"
        if not validate_priority(value):
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_PRIORITY,
                f"Priority must be between {PRIORITY_MIN} and {PRIORITY_MAX}, got {value}",
                value=value,
            )

        def patch(text: str) -> tuple[str, dict[str, Any]]:
            return set_integer_field(text, PRIORITY, value), {"priority": value}

        return await self._mutate(op, path, patch)

    @traced
    async def click_star(self, path: str, star: int) -> ServiceResult:
        """Apply the star rule to the current priority.

        Clicking the star that matches the current priority steps down by
        one; any other star (1-5) sets the priority to its index.
        """
        op = "click_star"
        if not 1 <= star <= PRIORITY_MAX:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_STAR,
                f"Star must be between 1 and {PRIORITY_MAX}, got {star}",
                star=star,
            )

        def patch(text: str) -> tuple[str, dict[str, Any]]:
            current = read_priority(parse_frontmatter(text)[0])
            priority = next_priority(current, star)
            return set_integer_field(text, PRIORITY, priority), {
                "previous": current,
                "priority": priority,
            }

        return await self._mutate(op, path, patch)

    @traced
    async def delete(self, path: str) -> ServiceResult:
        """Remove the file. There is no tombstone; archive is the soft delete."""
        op = "delete"
        try:
            await self._repo.delete(path)
        except (FileNotFoundError, ValueError):
            return self._not_found(op, path)
        except OSError as exc:
            return ServiceResult.failure(
                op, ErrorCode.STORAGE_ERROR, storage_message(exc), path=path
            )

        logger.info("Deleted %s", path)
        return ServiceResult(ok=True, op=op, data={"path": path})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _set_archived(self, op: str, path: str, *, value: bool) -> ServiceResult:
        def patch(text: str) -> tuple[str, dict[str, Any]]:
            return set_boolean_flag(text, ARCHIVED, value), {"archived": value}

        return await self._mutate(op, path, patch)

    async def _mutate(self, op: str, path: str, patch: Patch) -> ServiceResult:
        """Read *path*, apply *patch*, write back only if the text changed."""
        try:
            text = await self._repo.read(path)
            updated, data = patch(text)
            changed = updated != text
            if changed:
                await self._repo.modify(path, updated)
        except UnicodeDecodeError:
            return ServiceResult.failure(
                op, ErrorCode.STORAGE_ERROR, f"{path} is not valid UTF-8", path=path
            )
        except (FileNotFoundError, IsADirectoryError, ValueError):
            return self._not_found(op, path)
        except OSError as exc:
            return ServiceResult.failure(
                op, ErrorCode.STORAGE_ERROR, storage_message(exc), path=path
            )

        logger.debug("%s %s changed=%s", op, path, changed)
        return ServiceResult(ok=True, op=op, data={"path": path, "changed": changed, **data})

    @staticmethod
    def _not_found(op: str, path: str) -> ServiceResult:
        return ServiceResult.failure(
            op, ErrorCode.NOT_FOUND, f"No document at {path}", path=path
        )
