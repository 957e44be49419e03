"""Tests for timestamps, date folders and the effective-date chain."""

from __future__ import annotations

from datetime import UTC, datetime

from memoctl.domain.timestamps import (
    FIXED_OFFSET,
    folder_chain,
    format_timestamp,
    parse_created,
    parse_path_stamp,
    resolve_effective_date,
    resolve_path,
    to_fixed_offset_iso,
)

WHEN = datetime(2025, 3, 29, 8, 2, 5, 123456)


class TestResolvePath:
    def test_date_folder(self) -> None:
        assert resolve_path("Archives/Notifications", WHEN) == (
            "Archives/Notifications/2025/2025-03/2025-03-29"
        )

    def test_zero_padding(self) -> None:
        assert resolve_path("N", datetime(2025, 1, 2)) == "N/2025/2025-01/2025-01-02"

    def test_folder_chain(self) -> None:
        assert folder_chain("/a/b/c/") == ["a", "a/b", "a/b/c"]
        assert folder_chain("") == []


class TestFormatting:
    def test_fixed_offset_iso(self) -> None:
        assert to_fixed_offset_iso(WHEN) == "2025-03-29T08:02:05.123+09:00"

    def test_pattern_timestamp(self) -> None:
        assert format_timestamp("YYYYMMDD_HHmmss", WHEN) == "20250329_080205"

    def test_iso_timestamp(self) -> None:
        aware = datetime(2025, 3, 29, 8, 2, 5, tzinfo=UTC)
        assert format_timestamp("ISO", aware) == "2025-03-29T08-02-05"

    def test_unix_timestamp(self) -> None:
        aware = datetime(1970, 1, 1, 0, 1, 40, tzinfo=UTC)
        assert format_timestamp("Unix", aware) == "100"


class TestEffectiveDate:
    def test_created_wins(self) -> None:
        resolved = resolve_effective_date(
            "2025-03-29T08:02:00.000+09:00", "x/20240101_000000_memo.md", 0.0
        )
        assert resolved == datetime(2025, 3, 29, 8, 2, tzinfo=FIXED_OFFSET)

    def test_created_converted_to_fixed_offset(self) -> None:
        parsed = parse_created("2025-03-28T23:00:00+00:00")
        assert parsed is not None
        assert parsed.isoformat() == "2025-03-29T08:00:00+09:00"

    def test_naive_created_labelled(self) -> None:
        parsed = parse_created("2025-03-29T08:02:00")
        assert parsed == datetime(2025, 3, 29, 8, 2, tzinfo=FIXED_OFFSET)

    def test_invalid_created_falls_back_to_path(self) -> None:
        resolved = resolve_effective_date("yesterday", "a/20250301_120000_memo_x.md", None)
        assert resolved == datetime(2025, 3, 1, 12, 0, tzinfo=FIXED_OFFSET)

    def test_path_stamp_must_be_a_real_date(self) -> None:
        assert parse_path_stamp("a/20251399_999999_memo.md") is None

    def test_mtime_last(self) -> None:
        resolved = resolve_effective_date(None, "plain.md", 1_700_000_000.0)
        assert resolved.tzinfo == FIXED_OFFSET
        expected = datetime.fromtimestamp(1_700_000_000.0)
        assert resolved.replace(tzinfo=None) == expected

    def test_nothing_available_is_epoch(self) -> None:
        resolved = resolve_effective_date(None, "plain.md", None)
        assert resolved.timestamp() == 0

    def test_created_past_the_calendar_limit_falls_back(self) -> None:
        assert parse_created("9999-12-31T23:00:00+00:00") is None
        resolved = resolve_effective_date(
            "9999-12-31T23:00:00+00:00", "a/20250301_120000_memo_x.md", None
        )
        assert resolved == datetime(2025, 3, 1, 12, 0, tzinfo=FIXED_OFFSET)

    def test_mtime_out_of_range_is_epoch(self) -> None:
        resolved = resolve_effective_date(None, "plain.md", 1e20)
        assert resolved.timestamp() == 0
