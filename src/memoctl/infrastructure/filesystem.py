"""Document repository — async UTF-8 file storage under the vault root.

INVARIANT: Files are truth. There is no index and no cache; every query
re-reads the documents it needs.

Paths handed to the repository are vault-relative and slash-separated
(``Archives/Notifications/2025/2025-03/2025-03-29/x.md``). Every path is
checked against the vault root before it is touched.

File I/O goes through :class:`anyio.Path`. Callers await one operation at
a time; nothing here fans out.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import NamedTuple

import anyio

from memoctl.domain.document import Document
from memoctl.domain.timestamps import folder_chain

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"

# Directories to skip when listing documents.
_SKIP_DIRS = frozenset({".memoctl", ".obsidian", ".git", ".trash"})


class DocumentScan(NamedTuple):
    """Documents read by one corpus pass, plus the paths that could not be decoded."""

    documents: list[Document]
    unreadable: list[str]


async def _read_raw(target: anyio.Path) -> str:
    async with await target.open(encoding="utf-8", newline="") as handle:
        return await handle.read()


class DocumentRepository:
    """Create, read, overwrite, delete and list documents by vault path."""

    def __init__(self, root: Path) -> None:
        self._root = root
        self._resolved_root = root.resolve()

    @property
    def root(self) -> Path:
        return self._root

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def resolve(self, path: str) -> anyio.Path:
        """Map a vault path to an absolute file path.

        Raises ``ValueError`` when the result would escape the vault root.
        """
        relative = PurePosixPath(path.strip("/"))
        result = (self._root / relative).resolve()
        if not result.is_relative_to(self._resolved_root):
            msg = f"Path escapes vault root: {path}"
            raise ValueError(msg)
        return anyio.Path(result)

    def relative(self, absolute: Path) -> str:
        """Vault path (slash-separated) for an absolute file path."""
        return absolute.resolve().relative_to(self._resolved_root).as_posix()

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    async def exists(self, path: str) -> bool:
        return await self.resolve(path).is_file()

    async def create(self, path: str, text: str) -> None:
        """Write a new document. Raises ``FileExistsError`` if *path* is occupied.

        The parent folder chain is created first.
        """
        parent = str(PurePosixPath(path).parent)
        if parent != ".":
            await self.ensure_folder(parent)
        target = self.resolve(path)
        async with await target.open("x", encoding="utf-8", newline="") as handle:
            await handle.write(text)
        logger.debug("Created %s", path)

    async def read(self, path: str) -> str:
        """Return the raw text of *path*, line endings untouched. Raises ``FileNotFoundError``."""
        return await _read_raw(self.resolve(path))

    async def read_document(self, path: str) -> Document:
        """Read *path* and parse it, recording its modification time."""
        target = self.resolve(path)
        text = await _read_raw(target)
        stat = await target.stat()
        return Document.from_text(path, text, mtime=stat.st_mtime)

    async def modify(self, path: str, text: str) -> None:
        """Overwrite an existing document. Raises ``FileNotFoundError`` if it is gone."""
        target = self.resolve(path)
        if not await target.is_file():
            msg = f"No document at {path}"
            raise FileNotFoundError(msg)
        await target.write_text(text, encoding="utf-8", newline="")
        logger.debug("Modified %s", path)

    async def delete(self, path: str) -> None:
        """Remove a document. Raises ``FileNotFoundError`` if it is gone."""
        await self.resolve(path).unlink()
        logger.debug("Deleted %s", path)

    async def copy(self, source: str, target: str) -> None:
        """Copy *source* verbatim to a new document at *target*."""
        await self.create(target, await self.read(source))

    async def ensure_folder(self, folder: str) -> None:
        """Create each segment of *folder* that does not exist yet.

        Safe to call repeatedly and with parts of the chain already present.
        """
        for prefix in folder_chain(folder):
            target = self.resolve(prefix)
            if not await target.is_dir():
                await target.mkdir(exist_ok=True)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    async def list_by_prefix(self, folder: str = "") -> list[str]:
        """Vault paths of every markdown document under ``folder/``, sorted.

        An empty *folder* lists the whole vault. A missing folder lists
        nothing.
        """
        base = self.resolve(folder) if folder else anyio.Path(self._resolved_root)
        if not await base.is_dir():
            return []

        results: list[str] = []
        async for path in base.rglob(f"*{MARKDOWN_SUFFIX}"):
            relative = self.relative(Path(path))
            if any(part in _SKIP_DIRS for part in relative.split("/")):
                continue
            if not await path.is_file():
                continue
            results.append(relative)
        return sorted(results)

    async def scan_documents(self, folder: str = "") -> DocumentScan:
        """Read and parse every document under *folder*.

        Documents that disappear between listing and reading are skipped.
        Files that are not valid UTF-8 are skipped and reported in
        ``unreadable`` so one bad file cannot sink a whole pass.
        """
        documents: list[Document] = []
        unreadable: list[str] = []
        for path in await self.list_by_prefix(folder):
            try:
                documents.append(await self.read_document(path))
            except FileNotFoundError:
                logger.debug("Skipped vanished document %s", path)
            except UnicodeDecodeError as exc:
                logger.warning("Skipped %s: not valid UTF-8 (%s)", path, exc.reason)
                unreadable.append(path)
        return DocumentScan(documents, unreadable)

    async def load_documents(self, folder: str = "") -> list[Document]:
        """Readable documents under *folder*; see :meth:`scan_documents`."""
        return (await self.scan_documents(folder)).documents

    async def markdown_names(self) -> set[str]:
        """File names and stems of every document in the vault, for link checks."""
        names: set[str] = set()
        for path in await self.list_by_prefix():
            name = path.rsplit("/", 1)[-1]
            names.add(name)
            names.add(name.removesuffix(MARKDOWN_SUFFIX))
        return names

    async def find_by_name(self, name: str) -> str | None:
        """First document (in path order) whose file name or stem is *name*."""
        for path in await self.list_by_prefix():
            file_name = path.rsplit("/", 1)[-1]
            if name in (file_name, file_name.removesuffix(MARKDOWN_SUFFIX)):
                return path
        return None
