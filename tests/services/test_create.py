"""Tests for CreateService — memos, checklists, deep dives, articles, notifications."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from memoctl.domain.frontmatter import parse_frontmatter
from memoctl.infrastructure.vault import Vault
from memoctl.services.create import CreateService
from memoctl.services.result import ErrorCode

if TYPE_CHECKING:
    from tests.conftest import FakeGenerator

pytestmark = pytest.mark.anyio

FIXED_NOW = datetime(2025, 3, 29, 8, 2, 0, 123000)
DATE_FOLDER = "Archives/Notifications/2025/2025-03/2025-03-29"


@pytest.fixture(autouse=True)
def _fixed_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(CreateService, "_now", lambda self: FIXED_NOW)


def _fields(vault_root: Path, path: str) -> tuple[dict, str]:
    return parse_frontmatter((vault_root / path).read_text(encoding="utf-8"))


def _notification_files(vault_root: Path) -> list[Path]:
    base = vault_root / "Archives" / "Notifications"
    return sorted(base.rglob("*.md")) if base.exists() else []


# ---------------------------------------------------------------------------
# create_memo
# ---------------------------------------------------------------------------


class TestCreateMemo:
    async def test_writes_memo(self, vault: Vault, vault_root: Path) -> None:
        result = await CreateService(vault).create_memo("Plan A: move standup\nto 10am #team")
        assert result.ok, result.error
        assert result.op == "create_memo"
        assert result.data["path"] == f"{DATE_FOLDER}/20250329_080200_memo_Plan_A__move_standup.md"

        fields, body = _fields(vault_root, result.data["path"])
        assert fields["type"] == "memo"
        assert fields["context"] == "Plan A move standup"
        assert fields["created"] == "2025-03-29T08:02:00.123+09:00"
        assert "links" not in fields
        assert body == "Plan A: move standup\nto 10am #team"

    async def test_confirmed_links_only(
        self, vault: Vault, write_doc: Callable[[str, str], str]
    ) -> None:
        write_doc("Topics/Roadmap.md", "roadmap")
        result = await CreateService(vault).create_memo("See [[Roadmap]] and [[Nowhere]]")
        assert result.ok, result.error
        assert result.data["links"] == ["[[Roadmap]]"]

    async def test_source_added_to_links(
        self, vault: Vault, vault_root: Path, write_doc: Callable[[str, str], str]
    ) -> None:
        write_doc("Topics/Plan A.md", "plan")
        result = await CreateService(vault).create_memo("Reply", source="Topics/Plan A.md")
        assert result.ok, result.error
        fields, _ = _fields(vault_root, result.data["path"])
        assert fields["links"] == ["[[Plan A]]"]

    async def test_missing_source(self, vault: Vault, vault_root: Path) -> None:
        result = await CreateService(vault).create_memo("Reply", source="Topics/Gone.md")
        assert not result.ok
        assert result.error.code == ErrorCode.NOT_FOUND
        assert _notification_files(vault_root) == []

    async def test_empty_text(self, vault: Vault) -> None:
        result = await CreateService(vault).create_memo("   \n")
        assert not result.ok
        assert result.error.code == ErrorCode.EMPTY_CONTENT

    async def test_same_second_collision(self, vault: Vault) -> None:
        svc = CreateService(vault)
        assert (await svc.create_memo("Same text")).ok
        second = await svc.create_memo("Same text")
        assert not second.ok
        assert second.error.code == ErrorCode.ALREADY_EXISTS


# ---------------------------------------------------------------------------
# create_listify
# ---------------------------------------------------------------------------


class TestCreateListify:
    async def test_checklist_body(
        self,
        vault: Vault,
        vault_root: Path,
        generator: FakeGenerator,
        write_doc: Callable[[str, str], str],
    ) -> None:
        write_doc("Notes/release.md", "Tag, build and publish.")
        result = await CreateService(vault).create_listify(
            "Prepare the release", reference="Notes/release.md"
        )
        assert result.ok, result.error
        assert result.data["items"] == ["First step", "Second step"]
        assert "_listify_Prepare_the_release.md" in result.data["path"]

        fields, body = _fields(vault_root, result.data["path"])
        assert fields["type"] == "listify"
        assert fields["links"] == ["[[release]]"]
        assert body == "Prepare the release\n\n---\n\n- [ ] First step\n- [ ] Second step"

        assert len(generator.prompts) == 1
        assert "Tag, build and publish." in generator.prompts[0]

    async def test_no_checklist_lines(
        self, vault: Vault, vault_root: Path, generator: FakeGenerator
    ) -> None:
        generator.completion = "Sorry, I cannot help with that."
        result = await CreateService(vault).create_listify("Anything")
        assert not result.ok
        assert result.error.code == ErrorCode.GENERATION_FAILED
        assert _notification_files(vault_root) == []

    async def test_missing_reference_document(self, vault: Vault, generator: FakeGenerator) -> None:
        result = await CreateService(vault).create_listify("x", reference="Notes/gone.md")
        assert not result.ok
        assert result.error.code == ErrorCode.NOT_FOUND
        assert generator.prompts == []


# ---------------------------------------------------------------------------
# create_deep_dive
# ---------------------------------------------------------------------------


class TestCreateDeepDive:
    async def test_summary_body(
        self,
        vault: Vault,
        vault_root: Path,
        generator: FakeGenerator,
        write_doc: Callable[[str, str], str],
    ) -> None:
        generator.completion = "## Key points\n\n- one\n"
        write_doc("Notes/call.md", "transcript text")
        result = await CreateService(vault).create_deep_dive(
            "What matters", reference="Notes/call.md"
        )
        assert result.ok, result.error
        fields, body = _fields(vault_root, result.data["path"])
        assert fields["type"] == "deepDive"
        assert body == "What matters\n\n---\n\n## Key points\n\n- one"

    async def test_linked_documents_are_reference_material(
        self,
        vault: Vault,
        generator: FakeGenerator,
        write_doc: Callable[[str, str], str],
    ) -> None:
        generator.completion = "summary"
        write_doc("Topics/Plan A.md", "plan a details")
        result = await CreateService(vault).create_deep_dive("Compare [[Plan A]]")
        assert result.ok, result.error
        assert "plan a details" in generator.prompts[0]
        assert result.data["links"] == ["[[Plan A]]"]

    async def test_missing_reference_text(
        self, vault: Vault, vault_root: Path, generator: FakeGenerator
    ) -> None:
        result = await CreateService(vault).create_deep_dive("Nothing to summarize")
        assert not result.ok
        assert result.error.code == ErrorCode.MISSING_REFERENCE
        assert generator.prompts == []
        assert _notification_files(vault_root) == []

    async def test_generation_failure_writes_nothing(
        self,
        vault: Vault,
        vault_root: Path,
        generator: FakeGenerator,
        write_doc: Callable[[str, str], str],
    ) -> None:
        generator.error = "OpenAI API error: rate limited"
        write_doc("Notes/call.md", "transcript")
        result = await CreateService(vault).create_deep_dive("x", reference="Notes/call.md")
        assert not result.ok
        assert result.error.code == ErrorCode.GENERATION_FAILED
        assert "rate limited" in result.error.message
        assert _notification_files(vault_root) == []


# ---------------------------------------------------------------------------
# create_article / create_topic_notification
# ---------------------------------------------------------------------------


class TestCreateArticle:
    async def test_name_limited_to_fifty_chars(self, vault: Vault, vault_root: Path) -> None:
        text = "A" * 70 + "\nbody"
        result = await CreateService(vault).create_article(text)
        assert result.ok, result.error
        assert result.data["path"].endswith(f"_article_{'A' * 50}.md")
        fields, body = _fields(vault_root, result.data["path"])
        assert fields["type"] == "article"
        assert body == text

    async def test_source_field(
        self, vault: Vault, vault_root: Path, write_doc: Callable[[str, str], str]
    ) -> None:
        write_doc("Topics/Plan A.md", "plan")
        result = await CreateService(vault).create_article("Answer", source="Topics/Plan A.md")
        assert result.ok, result.error
        fields, _ = _fields(vault_root, result.data["path"])
        assert fields["source"] == "[[Plan A]]"


class TestCreateTopicNotification:
    async def test_new_topic(self, vault: Vault, vault_root: Path) -> None:
        result = await CreateService(vault).create_topic_notification("Plan A", updated=False)
        assert result.ok, result.error
        assert result.data["path"] == f"{DATE_FOLDER}/20250329_080200_topic_Plan_A.md"
        fields, body = _fields(vault_root, result.data["path"])
        assert fields["type"] == "topic-notification"
        assert fields["links"] == ["[[Plan A]]"]
        assert body == "New topic [[Plan A]] was created."

    async def test_updated_topic(self, vault: Vault, vault_root: Path) -> None:
        result = await CreateService(vault).create_topic_notification("a/b", updated=True)
        assert result.ok, result.error
        _, body = _fields(vault_root, result.data["path"])
        assert body == "Topic [[a-b]] was updated."
