"""Query expression models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import ClassVar, Iterable, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class Clockspec(str, Enum):
    """Timestamp a since term compares against."""

    OCLOCK = "oclock"
    MTIME = "mtime"
    CTIME = "ctime"


class BasenameScope(str, Enum):
    """Part of the path a name or match term applies to."""

    BASENAME = "basename"
    WHOLENAME = "wholename"


class _Expr(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    tag: ClassVar[str]


def _expression_instance(value):
    # Children must be built explicitly; mappings are not coerced into nodes
    if not isinstance(value, _Expr):
        raise ValueError(f"Expected a query expression, got {type(value).__name__}")
    return value


class _UnionExpr(_Expr):
    clauses: tuple[Expression, ...] = Field(min_length=1)

    @field_validator("clauses", mode="before")
    @classmethod
    def _only_expressions(cls, value):
        if isinstance(value, Iterable) and not isinstance(value, (str, bytes, dict)):
            value = tuple(_expression_instance(item) for item in value)
        return value


class AllOf(_UnionExpr):
    """Matches when every clause matches."""

    tag: ClassVar[str] = "allof"


class AnyOf(_UnionExpr):
    """Matches when at least one clause matches."""

    tag: ClassVar[str] = "anyof"


class Not(_Expr):
    """Inverts a clause."""

    tag: ClassVar[str] = "not"

    clause: Expression

    @field_validator("clause", mode="before")
    @classmethod
    def _only_expression(cls, value):
        return _expression_instance(value)


class TrueExpr(_Expr):
    tag: ClassVar[str] = "true"


class FalseExpr(_Expr):
    tag: ClassVar[str] = "false"


class Empty(_Expr):
    """Matches empty files and directories."""

    tag: ClassVar[str] = "empty"


class Exists(_Expr):
    """Matches files that currently exist."""

    tag: ClassVar[str] = "exists"


class Since(_Expr):
    """Matches files changed since a clock or a unix timestamp."""

    tag: ClassVar[str] = "since"

    value: Union[StrictStr, StrictInt]
    clockspec: Clockspec | None = None

    @classmethod
    def from_clock(cls, clock: str, clockspec: Clockspec | None = None) -> Since:
        """Create from an opaque clock cursor."""
        return cls(value=clock, clockspec=clockspec)

    @classmethod
    def from_timestamp(
        cls, timestamp: int | datetime, clockspec: Clockspec | None = None
    ) -> Since:
        """Create from seconds since the epoch."""
        if isinstance(timestamp, datetime):
            timestamp = int(timestamp.timestamp())
        return cls(value=timestamp, clockspec=clockspec)

    @property
    def is_timestamp(self) -> bool:
        return isinstance(self.value, int)


class Suffix(_Expr):
    """Matches files with the given extension."""

    tag: ClassVar[str] = "suffix"

    suffix: str


class _PatternExpr(_Expr):
    pattern: str
    scope: BasenameScope | None = None


class Match(_PatternExpr):
    """Glob match."""

    tag: ClassVar[str] = "match"


class IMatch(_PatternExpr):
    """Case-insensitive glob match."""

    tag: ClassVar[str] = "imatch"


class Pcre(_PatternExpr):
    """Perl-compatible regular expression match."""

    tag: ClassVar[str] = "pcre"


class IPcre(_PatternExpr):
    """Case-insensitive regular expression match."""

    tag: ClassVar[str] = "ipcre"


class _NamesExpr(_Expr):
    names: tuple[str, ...] = Field(min_length=1)
    scope: BasenameScope | None = None

    @field_validator("names", mode="before")
    @classmethod
    def _single_name(cls, value):
        # A lone string is one name, not a sequence of characters
        if isinstance(value, str):
            return (value,)
        return value


class Name(_NamesExpr):
    """Exact name match against one or more names."""

    tag: ClassVar[str] = "name"


class IName(_NamesExpr):
    """Case-insensitive name match."""

    tag: ClassVar[str] = "iname"


class Type(_Expr):
    """Matches files of a type, e.g. ``f`` for regular files or ``d`` for directories."""

    tag: ClassVar[str] = "type"

    file_type: str = Field(min_length=1, max_length=1)


Expression = Union[
    AllOf,
    AnyOf,
    Not,
    TrueExpr,
    FalseExpr,
    Empty,
    Exists,
    Since,
    Suffix,
    Match,
    IMatch,
    Pcre,
    IPcre,
    Name,
    IName,
    Type,
]

_UnionExpr.model_rebuild()
AllOf.model_rebuild()
AnyOf.model_rebuild()
Not.model_rebuild()
