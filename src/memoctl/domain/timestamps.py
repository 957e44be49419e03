"""Timestamps and the date-folder path resolver.

Every wall-clock reading in the vault is labelled with a fixed ``+09:00``
offset. The local fields (year ... millisecond) are used as-is and the
suffix is appended; nothing is converted from the host timezone. File names,
date folders and the ``created`` field therefore always agree with each
other.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone

FIXED_OFFSET = timezone(timedelta(hours=9))
FIXED_OFFSET_SUFFIX = "+09:00"

DEFAULT_TIMESTAMP_FORMAT = "YYYYMMDD_HHmmss"

# YYYYMMDD_HHmmss anywhere in a path.
_PATH_STAMP = re.compile(r"(\d{8})_(\d{6})")


def now_local() -> datetime:
    """Current local wall-clock time (naive)."""
    return datetime.now()


def label_wall_clock(when: datetime) -> datetime:
    """Attach the fixed offset to a naive wall-clock reading."""
    if when.tzinfo is not None:
        return when.astimezone(FIXED_OFFSET)
    return when.replace(tzinfo=FIXED_OFFSET)


def to_fixed_offset_iso(when: datetime) -> str:
    """Format *when* as ``YYYY-MM-DDTHH:mm:ss.SSS+09:00`` from its wall-clock fields."""
    millis = when.microsecond // 1000
    return f"{when:%Y-%m-%dT%H:%M:%S}.{millis:03d}{FIXED_OFFSET_SUFFIX}"


def format_timestamp(fmt: str, when: datetime) -> str:
    """Render the file-name timestamp for *when*.

    ``ISO`` gives the UTC instant with ``:`` and ``.`` replaced by ``-`` and
    no fraction; ``Unix`` gives epoch seconds; anything else is a pattern
    of ``YYYY MM DD HH mm ss`` tokens.
    """
    if fmt == "ISO":
        instant = when.astimezone(UTC)
        return f"{instant:%Y-%m-%dT%H-%M-%S}"
    if fmt == "Unix":
        return str(int(when.timestamp()))
    return (
        fmt.replace("YYYY", f"{when.year:04d}")
        .replace("MM", f"{when.month:02d}")
        .replace("DD", f"{when.day:02d}")
        .replace("HH", f"{when.hour:02d}")
        .replace("mm", f"{when.minute:02d}")
        .replace("ss", f"{when.second:02d}")
    )


def resolve_path(base_folder: str, when: datetime) -> str:
    """Return ``base/YYYY/YYYY-MM/YYYY-MM-DD`` for *when*."""
    year = f"{when.year:04d}"
    month = f"{year}-{when.month:02d}"
    day = f"{month}-{when.day:02d}"
    return f"{base_folder}/{year}/{month}/{day}"


def folder_chain(folder: str) -> list[str]:
    """Every prefix of a slash-separated *folder*, shortest first.

    >>> folder_chain("a/b/c")
    ['a', 'a/b', 'a/b/c']
    """
    parts = [part for part in folder.split("/") if part]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


# ---------------------------------------------------------------------------
# Effective-date sources
# ---------------------------------------------------------------------------


def parse_created(value: str | None) -> datetime | None:
    """Parse a ``created`` value into the fixed offset, or None if unusable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
        return label_wall_clock(parsed)
    except (ValueError, OverflowError):
        return None


def parse_path_stamp(path: str) -> datetime | None:
    """Read a ``YYYYMMDD_HHmmss`` stamp from anywhere in *path*."""
    match = _PATH_STAMP.search(path)
    if match is None:
        return None
    try:
        parsed = datetime.strptime(f"{match.group(1)}{match.group(2)}", "%Y%m%d%H%M%S")
        return label_wall_clock(parsed)
    except (ValueError, OverflowError):
        return None


def from_mtime(mtime: float) -> datetime | None:
    """Label a file modification time as a wall-clock reading, or None if out of range."""
    try:
        return label_wall_clock(datetime.fromtimestamp(mtime))
    except (ValueError, OverflowError, OSError):
        return None


def day_key(when: datetime) -> str:
    """``YYYYMMDD`` bucket key for *when*."""
    return f"{when:%Y%m%d}"


def resolve_effective_date(created: str | None, path: str, mtime: float | None) -> datetime:
    """Effective date: ``created`` field, then a path stamp, then the file mtime.

    With none of the three usable the epoch is returned, which sorts last.
    """
    resolved = parse_created(created) or parse_path_stamp(path)
    if resolved is None and mtime is not None:
        resolved = from_mtime(mtime)
    if resolved is not None:
        return resolved
    return datetime.fromtimestamp(0, FIXED_OFFSET)
