"""Tests for context strings, file names and topic keys."""

from __future__ import annotations

from memoctl.domain.naming import (
    context_from_input,
    document_file_name,
    safe_file_fragment,
    sanitize_context,
    topic_key,
)


class TestContext:
    def test_first_line_only(self) -> None:
        assert context_from_input("Plan A\nmore detail") == "Plan A"

    def test_unwraps_wikilinks(self) -> None:
        assert context_from_input("Ask about [[the plan|Plan A]]") == "Ask about the plan"

    def test_drops_unsafe_and_collapses_whitespace(self) -> None:
        assert sanitize_context('a/b  "c"   #tag?') == "ab c tag"


class TestFileNames:
    def test_fragment(self) -> None:
        assert safe_file_fragment("a b/c:d") == "a_b_c_d"

    def test_document_file_name(self) -> None:
        name = document_file_name("20250329_080200", "memo", "Plan A: start\nsecond")
        assert name == "20250329_080200_memo_Plan_A__start.md"

    def test_limit(self) -> None:
        name = document_file_name("T", "article", "x" * 80, limit=50)
        assert name == f"T_article_{'x' * 50}.md"


class TestTopicKey:
    def test_unsafe_become_dashes(self) -> None:
        assert topic_key('a<b>c:d"e/f\\g|h?i*j') == "a-b-c-d-e-f-g-h-i-j"

    def test_spaces_kept(self) -> None:
        assert topic_key("Plan A") == "Plan A"
