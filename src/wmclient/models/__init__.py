"""Data models for wmclient."""

from wmclient.models.config import (
    Config,
    ConnectionConfig,
    LoggingConfig,
)
from wmclient.models.expression import (
    AllOf,
    AnyOf,
    BasenameScope,
    Clockspec,
    Empty,
    Exists,
    Expression,
    FalseExpr,
    IMatch,
    IName,
    IPcre,
    Match,
    Name,
    Not,
    Pcre,
    Since,
    Suffix,
    TrueExpr,
    Type,
)
from wmclient.models.results import QueryResult, Stat, WatchList

__all__ = [
    "Config",
    "ConnectionConfig",
    "LoggingConfig",
    "AllOf",
    "AnyOf",
    "BasenameScope",
    "Clockspec",
    "Empty",
    "Exists",
    "Expression",
    "FalseExpr",
    "IMatch",
    "IName",
    "IPcre",
    "Match",
    "Name",
    "Not",
    "Pcre",
    "Since",
    "Suffix",
    "TrueExpr",
    "Type",
    "QueryResult",
    "Stat",
    "WatchList",
]
