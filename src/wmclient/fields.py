"""Result field selection."""

from __future__ import annotations

from enum import IntFlag
from typing import Iterable

# Wire names, in emission order. Bit i of a mask selects FIELD_NAMES[i].
FIELD_NAMES: tuple[str, ...] = (
    "name",
    "exists",
    "cclock",
    "oclock",
    "ctime",
    "ctime_ms",
    "ctime_us",
    "ctime_ns",
    "ctime_f",
    "mtime",
    "mtime_ms",
    "mtime_us",
    "mtime_ns",
    "mtime_f",
    "size",
    "uid",
    "gid",
    "ino",
    "dev",
    "nlink",
    "new",
)


class QueryField(IntFlag):
    """Fields a query asks the daemon to report for each file."""

    NAME = 1 << 0
    EXISTS = 1 << 1
    CCLOCK = 1 << 2
    OCLOCK = 1 << 3
    CTIME = 1 << 4
    CTIME_MS = 1 << 5
    CTIME_US = 1 << 6
    CTIME_NS = 1 << 7
    CTIME_F = 1 << 8
    MTIME = 1 << 9
    MTIME_MS = 1 << 10
    MTIME_US = 1 << 11
    MTIME_NS = 1 << 12
    MTIME_F = 1 << 13
    SIZE = 1 << 14
    UID = 1 << 15
    GID = 1 << 16
    INO = 1 << 17
    DEV = 1 << 18
    NLINK = 1 << 19
    NEW = 1 << 20


DEFAULT_FIELDS = QueryField.NAME | QueryField.EXISTS | QueryField.NEW | QueryField.SIZE


def fields_to_json(fields: int) -> list[str]:
    """Field names selected by a mask, in declaration order."""
    return [name for bit, name in enumerate(FIELD_NAMES) if fields & (1 << bit)]


def fields_from_names(names: Iterable[str]) -> QueryField:
    """Build a mask from wire field names."""
    mask = QueryField(0)
    for name in names:
        try:
            bit = FIELD_NAMES.index(name)
        except ValueError:
            raise ValueError(f"Unknown field: {name}") from None
        mask |= QueryField(1 << bit)
    return mask
