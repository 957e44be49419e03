"""QueryService — listing, detail, references and share text.

Every call re-reads the documents it needs; there is no index.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from pydantic import ValidationError

from memoctl.domain.document import Document
from memoctl.domain.frontmatter import strip_frontmatter
from memoctl.domain.links import format_wikilink
from memoctl.domain.query import QueryState, run_query
from memoctl.domain.references import find_references
from memoctl.services._helpers import storage_message
from memoctl.services.base import BaseService
from memoctl.services.result import ErrorCode, ServiceResult
from memoctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class QueryService(BaseService):
    """Read-only views over the vault."""

    @traced
    async def list_documents(
        self,
        *,
        show_archived: bool = False,
        keyword: str | None = None,
        search_date: date | str | None = None,
        doc_type: str | None = None,
        priorities: tuple[int, ...] | list[int] = (),
    ) -> ServiceResult:
        """Filtered, ordered listing of the notification folder.

        Pinned documents come first, then newest first. Only keywords
        starting with ``#`` filter; any other keyword is ignored with a
        warning.
        """
        op = "list_documents"
        warnings: list[str] = []
        try:
            state = QueryState(
                show_archived=show_archived,
                search_keyword=keyword or None,
                search_date=search_date or None,
                search_type=doc_type or None,
                selected_priorities=frozenset(priorities),
            )
        except ValidationError as exc:
            message = "; ".join(err["msg"] for err in exc.errors())
            return ServiceResult.failure(op, ErrorCode.INVALID_QUERY, message)

        if state.search_keyword and not state.search_keyword.startswith("#"):
            warnings.append(f"Keyword '{state.search_keyword}' ignored: only #hashtags filter")

        corpus, skipped = await self._corpus()
        warnings.extend(skipped)
        with trace_span("run_query") as span:
            outcome = run_query(corpus, state)
            if span is not None:
                span.annotate("matched", outcome.count)

        preview_lines = self._vault.settings.query.preview_lines
        items = [
            {**doc.summary(), "preview": doc.preview(preview_lines)} for doc in outcome.documents
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "count": outcome.count,
                "total": outcome.total,
                "items": items,
                "hashtags": outcome.hashtags,
                "dates": outcome.dates,
            },
            warnings=warnings,
        )

    @traced
    async def get(self, path: str) -> ServiceResult:
        """Parsed fields, effective date, flags and body of one document."""
        op = "get"
        doc = await self._load(path)
        if isinstance(doc, ServiceResult):
            return doc.model_copy(update={"op": op})

        return ServiceResult(
            ok=True,
            op=op,
            data={
                **doc.summary(),
                "name": doc.stem,
                "frontmatter": dict(doc.frontmatter),
                "links": doc.links,
                "body": doc.body,
            },
        )

    @traced
    async def references(self, path: str) -> ServiceResult:
        """Backlinks, frontlinks and hashtag-related documents across the whole vault."""
        op = "references"
        target = await self._load(path)
        if isinstance(target, ServiceResult):
            return target.model_copy(update={"op": op})

        corpus, warnings = await self._corpus("")
        with trace_span("find_references"):
            refs = find_references(target, corpus)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": target.path,
                "name": target.stem,
                "backlinks": [_ref_row(doc) for doc in refs.backlinks],
                "frontlinks": [_ref_row(doc) for doc in refs.frontlinks],
                "related": [
                    {**_ref_row(item.document), "shared": sorted(item.shared)}
                    for item in refs.related
                ],
            },
            warnings=warnings,
        )

    @traced
    async def share(self, path: str) -> ServiceResult:
        """``[[name]]``, a blank line, then the body without frontmatter."""
        op = "share"
        doc = await self._load(path)
        if isinstance(doc, ServiceResult):
            return doc.model_copy(update={"op": op})

        text = f"{format_wikilink(doc.stem)}\n\n{strip_frontmatter(doc.text)}"
        return ServiceResult(ok=True, op=op, data={"path": doc.path, "text": text})

    async def _load(self, path: str) -> Document | ServiceResult:
        """The document at *path*, or a failed result explaining why not."""
        try:
            return await self._repo.read_document(path)
        except UnicodeDecodeError:
            return ServiceResult.failure(
                "read", ErrorCode.STORAGE_ERROR, f"{path} is not valid UTF-8", path=path
            )
        except (FileNotFoundError, IsADirectoryError, ValueError):
            return ServiceResult.failure(
                "read", ErrorCode.NOT_FOUND, f"No document at {path}", path=path
            )
        except OSError as exc:
            return ServiceResult.failure(
                "read", ErrorCode.STORAGE_ERROR, storage_message(exc), path=path
            )


def _ref_row(doc: Document) -> dict[str, Any]:
    return {"path": doc.path, "name": doc.stem, "context": doc.context, "type": doc.doc_type}
