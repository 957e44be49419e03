"""Tests for hashtag extraction."""

from __future__ import annotations

from memoctl.domain.tags import collect_hashtags, extract_hashtags


class TestExtractHashtags:
    def test_ascii_and_japanese(self) -> None:
        tags = extract_hashtags("note #プロジェクト and #Test and #漢字かな")
        assert tags == {"#プロジェクト", "#test", "#漢字かな"}

    def test_stops_at_punctuation(self) -> None:
        assert extract_hashtags("#done, #next!") == {"#done", "#next"}

    def test_bare_hash_ignored(self) -> None:
        assert extract_hashtags("## heading and # alone") == set()


class TestCollectHashtags:
    def test_sorted_and_deduplicated(self) -> None:
        assert collect_hashtags(["#b #a", "#A #c"]) == ["#a", "#b", "#c"]

    def test_empty(self) -> None:
        assert collect_hashtags([]) == []
