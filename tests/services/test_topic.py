"""Tests for TopicService — promote into topic aggregates."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from memoctl.domain.frontmatter import parse_frontmatter
from memoctl.infrastructure.vault import Vault
from memoctl.services.result import ErrorCode
from memoctl.services.topic import TopicService

pytestmark = pytest.mark.anyio

FOLDER = "Archives/Notifications/2025/2025-03/2025-03-29"
FIRST = '---\ntype: memo\ncontext: "Plan A"\n---\n\nfirst body'
SECOND = '---\ntype: memo\ncontext: "Plan A"\npinned: true\n---\n\nsecond body\n'


class TestPromote:
    async def test_first_promotion_copies_verbatim(
        self, vault: Vault, vault_root: Path, write_doc: Callable[[str, str], str]
    ) -> None:
        source = write_doc(f"{FOLDER}/first.md", FIRST)
        result = await TopicService(vault).promote(source)
        assert result.ok, result.error
        assert result.data["topic"] == "Topics/Plan A.md"
        assert result.data["updated"] is False
        assert (vault_root / "Topics" / "Plan A.md").read_text(encoding="utf-8") == FIRST

        notification = result.data["notification"]
        assert notification is not None
        fields, body = parse_frontmatter((vault_root / notification).read_text(encoding="utf-8"))
        assert fields["type"] == "topic-notification"
        assert body == "New topic [[Plan A]] was created."

    async def test_second_promotion_appends_body(
        self, vault: Vault, vault_root: Path, write_doc: Callable[[str, str], str]
    ) -> None:
        svc = TopicService(vault)
        await svc.promote(write_doc(f"{FOLDER}/first.md", FIRST))
        result = await svc.promote(write_doc(f"{FOLDER}/second.md", SECOND))
        assert result.ok, result.error
        assert result.data["updated"] is True

        topic = (vault_root / "Topics" / "Plan A.md").read_text(encoding="utf-8")
        assert topic == f"{FIRST}\n\n---\n\nsecond body"
        assert parse_frontmatter(topic)[0] == {"type": "memo", "context": "Plan A"}

    async def test_fallback_label_without_context(
        self, vault: Vault, vault_root: Path, write_doc: Callable[[str, str], str]
    ) -> None:
        source = write_doc(f"{FOLDER}/plain.md", "no frontmatter here")
        result = await TopicService(vault).promote(source)
        assert result.ok, result.error
        assert result.data["key"] == "Deep Dive"
        assert (vault_root / "Topics" / "Deep Dive.md").exists()

    async def test_unsafe_characters_in_key(
        self, vault: Vault, write_doc: Callable[[str, str], str]
    ) -> None:
        source = write_doc(f"{FOLDER}/q.md", '---\ncontext: "What? A/B"\n---\n\nx')
        result = await TopicService(vault).promote(source)
        assert result.ok, result.error
        assert result.data["topic"] == "Topics/What- A-B.md"

    async def test_missing_source(self, vault: Vault) -> None:
        result = await TopicService(vault).promote("nowhere.md")
        assert not result.ok
        assert result.error.code == ErrorCode.NOT_FOUND
