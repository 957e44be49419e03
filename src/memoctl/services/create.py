"""CreateService — the producer actions that add documents to the vault.

Pipeline: VALIDATE → GATHER → GENERATE → WRITE → RESPOND

Every new document lands in the notification date folder for "now" and
gets its ``created`` field exactly once, here. Generation happens before
any write, so a provider failure never leaves a partial document behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from memoctl.domain.frontmatter import render_frontmatter
from memoctl.domain.links import confirmed_links, extract_wikilinks, format_wikilink
from memoctl.domain.naming import context_from_input, document_file_name, topic_key
from memoctl.domain.timestamps import to_fixed_offset_iso
from memoctl.domain.types import DocType
from memoctl.infrastructure.generation import GenerationError
from memoctl.services._helpers import (
    headline,
    is_blank,
    parse_checklist,
    storage_message,
    title_for,
)
from memoctl.services.base import BaseService
from memoctl.services.result import ErrorCode, ServiceResult
from memoctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n---\n\n"
ARTICLE_NAME_LIMIT = 50


@dataclass(frozen=True)
class ReferenceMaterial:
    """Text handed to the generator alongside the user's request."""

    title: str
    text: str
    source_stem: str | None = None


class CreateService(BaseService):
    """Creates memos, checklists, deep dives, articles and topic notifications."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    async def create_memo(self, text: str, *, source: str | None = None) -> ServiceResult:
        """Store *text* verbatim as a ``memo``.

        An existing *source* document is added to ``links``.
        """
        op = "create_memo"
        if is_blank(text):
            return ServiceResult.failure(op, ErrorCode.EMPTY_CONTENT, "Memo text is empty")

        source_stem, missing = await self._source_stem(source)
        if missing:
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"Source document not found: {source}", path=source
            )

        when = self._now()
        frontmatter = await self._base_frontmatter(DocType.MEMO, text, when, extra=source_stem)
        return await self._write(op, DocType.MEMO, text, when, frontmatter, text)

    @traced
    async def create_listify(self, text: str, *, reference: str | None = None) -> ServiceResult:
        """Ask the generator for a ``- [ ]`` checklist about *text*.

        The document body is the request, a ``---`` separator, then the
        checklist items. A completion without any checklist line is treated
        as a failed generation.
        """
        op = "create_listify"
        if is_blank(text):
            return ServiceResult.failure(op, ErrorCode.EMPTY_CONTENT, "Request text is empty")

        material = await self._gather(text, reference)
        if material is None:
            return ServiceResult.failure(
                op,
                ErrorCode.NOT_FOUND,
                f"Reference document not found: {reference}",
                path=reference,
            )

        try:
            prompt = self._vault.render_prompt(
                "listify", request=text, title=material.title, reference=material.text
            )
            completion = await self._complete(prompt)
        except GenerationError as exc:
            return ServiceResult.failure(op, ErrorCode.GENERATION_FAILED, str(exc))

        items = parse_checklist(completion)
        if not items:
            return ServiceResult.failure(
                op,
                ErrorCode.GENERATION_FAILED,
                "Generator returned no checklist items",
                completion=completion,
            )

        when = self._now()
        checklist = "\n".join(f"- [ ] {item}" for item in items)
        body = f"{text}{SECTION_SEPARATOR}{checklist}"
        frontmatter = await self._base_frontmatter(
            DocType.LISTIFY, text, when, extra=material.source_stem
        )
        result = await self._write(op, DocType.LISTIFY, text, when, frontmatter, body)
        if not result.ok:
            return result
        return result.model_copy(update={"data": {**result.data, "items": items}})

    @traced
    async def create_deep_dive(self, text: str, *, reference: str | None = None) -> ServiceResult:
        """Ask the generator to summarize the reference material in the context of *text*.

        Refuses with ``MISSING_REFERENCE`` before calling the generator when
        there is no reference text at all.
        """
        op = "create_deep_dive"
        if is_blank(text):
            return ServiceResult.failure(op, ErrorCode.EMPTY_CONTENT, "Request text is empty")

        material = await self._gather(text, reference)
        if material is None:
            return ServiceResult.failure(
                op,
                ErrorCode.NOT_FOUND,
                f"Reference document not found: {reference}",
                path=reference,
            )
        if is_blank(material.text):
            return ServiceResult.failure(
                op,
                ErrorCode.MISSING_REFERENCE,
                "No reference text: pass --reference or link existing documents",
            )

        try:
            prompt = self._vault.render_prompt(
                "deep_dive", request=text, title=material.title, reference=material.text
            )
            completion = await self._complete(prompt)
        except GenerationError as exc:
            return ServiceResult.failure(op, ErrorCode.GENERATION_FAILED, str(exc))

        when = self._now()
        body = f"{text}{SECTION_SEPARATOR}{completion.strip()}"
        frontmatter = await self._base_frontmatter(
            DocType.DEEP_DIVE, text, when, extra=material.source_stem
        )
        return await self._write(op, DocType.DEEP_DIVE, text, when, frontmatter, body)

    @traced
    async def create_article(self, text: str, *, source: str | None = None) -> ServiceResult:
        """Start a hand-written ``article`` seeded with *text*.

        The file name uses at most the first 50 characters of the first line.
        """
        op = "create_article"
        if is_blank(text):
            return ServiceResult.failure(op, ErrorCode.EMPTY_CONTENT, "Article text is empty")

        source_stem, missing = await self._source_stem(source)
        if missing:
            return ServiceResult.failure(
                op, ErrorCode.NOT_FOUND, f"Source document not found: {source}", path=source
            )

        when = self._now()
        frontmatter: dict[str, Any] = {
            "type": DocType.ARTICLE,
            "context": context_from_input(text) or None,
            "source": format_wikilink(source_stem) if source_stem else None,
            "created": to_fixed_offset_iso(when),
        }
        return await self._write(
            op, DocType.ARTICLE, text, when, frontmatter, text, limit=ARTICLE_NAME_LIMIT
        )

    @traced
    async def create_topic_notification(self, context: str, *, updated: bool) -> ServiceResult:
        """Record that the topic for *context* was created or appended to."""
        op = "create_topic_notification"
        key = topic_key(context)
        token = format_wikilink(key)
        message = f"Topic {token} was updated." if updated else f"New topic {token} was created."

        when = self._now()
        frontmatter: dict[str, Any] = {
            "type": DocType.TOPIC_NOTIFICATION,
            "context": context_from_input(context) or None,
            "links": [token],
            "created": to_fixed_offset_iso(when),
        }
        return await self._write(op, "topic", key, when, frontmatter, message)

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    async def _source_stem(self, source: str | None) -> tuple[str | None, bool]:
        """``(stem, missing)`` for an optional source document path."""
        if not source:
            return None, False
        try:
            exists = await self._repo.exists(source)
        except ValueError:
            return None, True
        if not exists:
            return None, True
        return source.rsplit("/", 1)[-1].removesuffix(".md"), False

    async def _gather(self, text: str, reference: str | None) -> ReferenceMaterial | None:
        """Reference document text plus every existing document linked from *text*.

        Returns None when an explicit *reference* does not exist.
        """
        title = ""
        parts: list[str] = []
        source_stem: str | None = None

        with trace_span("gather_references") as span:
            if reference:
                try:
                    parts.append(await self._repo.read(reference))
                except (FileNotFoundError, IsADirectoryError, ValueError):
                    return None
                source_stem = reference.rsplit("/", 1)[-1].removesuffix(".md")
                title = title_for(source_stem)

            linked: list[str] = []
            for link in extract_wikilinks(text):
                path = await self._repo.find_by_name(link.target)
                if path is None:
                    continue
                try:
                    content = await self._repo.read(path)
                except FileNotFoundError:
                    logger.debug("Linked document vanished: %s", path)
                    continue
                except UnicodeDecodeError:
                    logger.warning("Linked document is not valid UTF-8: %s", path)
                    continue
                linked.append(f"\n\n## [[{link.target}]]\n{content}")

            if span is not None:
                span.annotate("linked", len(linked))

        body = "".join(parts) + "\n".join(linked)
        return ReferenceMaterial(title=title, text=body, source_stem=source_stem)

    async def _complete(self, prompt: str) -> str:
        """Run the generator. Everything it raises becomes :class:`GenerationError`."""
        generator = self._vault.generator
        with trace_span("generate"):
            completion = await generator.complete(prompt)
        if is_blank(completion):
            msg = "Generator returned an empty completion"
            raise GenerationError(msg)
        return completion

    async def _base_frontmatter(
        self,
        doc_type: DocType,
        text: str,
        when: datetime,
        *,
        extra: str | None = None,
    ) -> dict[str, Any]:
        """``type``, ``context``, confirmed ``links`` and ``created`` for a new document."""
        candidates = text if extra is None else f"{text}\n{format_wikilink(extra)}"
        names = await self._repo.markdown_names()
        return {
            "type": doc_type,
            "context": context_from_input(text) or None,
            "links": confirmed_links(candidates, names),
            "created": to_fixed_offset_iso(when),
        }

    async def _write(
        self,
        op: str,
        kind: str,
        text: str,
        when: datetime,
        frontmatter: dict[str, Any],
        body: str,
        *,
        limit: int | None = None,
    ) -> ServiceResult:
        file_name = document_file_name(self._file_timestamp(when), kind, text, limit=limit)
        path = f"{self._date_folder(when)}/{file_name}"

        try:
            with trace_span("write"):
                await self._repo.create(path, render_frontmatter(frontmatter, body))
        except FileExistsError:
            return ServiceResult.failure(
                op, ErrorCode.ALREADY_EXISTS, f"Document already exists: {path}", path=path
            )
        except OSError as exc:
            return ServiceResult.failure(
                op, ErrorCode.STORAGE_ERROR, storage_message(exc), path=path
            )

        logger.info("Created %s (%s)", path, headline(text))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": path,
                "type": str(frontmatter["type"]),
                "context": frontmatter.get("context"),
                "links": list(frontmatter.get("links") or []),
                "created": frontmatter["created"],
            },
        )
