"""Backlinks, frontlinks and related-keyword documents for one target."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from memoctl.domain.document import Document
from memoctl.domain.links import extract_wikilinks, format_wikilink
from memoctl.domain.tags import extract_hashtags


@dataclass(frozen=True)
class RelatedDocument:
    document: Document
    shared: frozenset[str]


@dataclass(frozen=True)
class References:
    backlinks: list[Document] = field(default_factory=list)
    frontlinks: list[Document] = field(default_factory=list)
    related: list[RelatedDocument] = field(default_factory=list)


def _newest_first(documents: list[Document]) -> list[Document]:
    return sorted(documents, key=lambda doc: doc.mtime or 0.0, reverse=True)


def find_references(target: Document, corpus: Sequence[Document]) -> References:
    """Scan *corpus* for documents connected to *target*.

    Backlinks contain ``[[<target stem>]]`` verbatim. Frontlinks are the
    existing documents named by wikilinks in the target. Related documents
    share at least one hashtag with the target, most shared first.
    """
    others = [doc for doc in corpus if doc.path != target.path]

    token = format_wikilink(target.stem)
    backlinks = [doc for doc in others if token in doc.text]

    wanted = {link.target for link in extract_wikilinks(target.text)}
    frontlinks = [doc for doc in others if doc.stem in wanted or doc.name in wanted]

    target_tags = extract_hashtags(target.text)
    related: list[RelatedDocument] = []
    if target_tags:
        for doc in others:
            shared = target_tags & extract_hashtags(doc.text)
            if shared:
                related.append(RelatedDocument(document=doc, shared=frozenset(shared)))
    related.sort(key=lambda item: len(item.shared), reverse=True)

    return References(
        backlinks=_newest_first(backlinks),
        frontlinks=_newest_first(frontlinks),
        related=related,
    )
