"""Client for the watchman daemon's JSON protocol."""

from wmclient.commands import (
    connect,
    query,
    read_and_handle_errors,
    send_simple_command,
    watch,
    watch_del,
    watch_list,
)
from wmclient.compiler import compile_expression
from wmclient.connection import Connection
from wmclient.errors import (
    ConfigError,
    DiscoveryError,
    ProtocolError,
    SchemaError,
    SemanticError,
    WatchmanConnectionError,
    WatchmanError,
    WatchmanTimeoutError,
)
from wmclient.fields import DEFAULT_FIELDS, QueryField, fields_to_json
from wmclient.models import (
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
    QueryResult,
    Since,
    Stat,
    Suffix,
    TrueExpr,
    Type,
    WatchList,
)

__all__ = [
    "connect",
    "query",
    "read_and_handle_errors",
    "send_simple_command",
    "watch",
    "watch_del",
    "watch_list",
    "compile_expression",
    "Connection",
    "ConfigError",
    "DiscoveryError",
    "ProtocolError",
    "SchemaError",
    "SemanticError",
    "WatchmanConnectionError",
    "WatchmanError",
    "WatchmanTimeoutError",
    "DEFAULT_FIELDS",
    "QueryField",
    "fields_to_json",
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
    "QueryResult",
    "Since",
    "Stat",
    "Suffix",
    "TrueExpr",
    "Type",
    "WatchList",
]
