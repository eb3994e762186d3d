"""Decode daemon responses into result models."""

from __future__ import annotations

from typing import Any

from wmclient.errors import SchemaError, SemanticError, dump
from wmclient.models.results import QueryResult, Stat, WatchList


def _require(ok: bool, message: str, value: Any) -> None:
    if not ok:
        raise SchemaError(message % dump(value), value)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_error(obj: Any) -> dict[str, Any]:
    """Ensure a response is an object without an error key.

    Raises:
        SchemaError: If the response is not a JSON object
        SemanticError: If the daemon reported an error
    """
    _require(isinstance(obj, dict), "Got non-object result from watchman: %s", obj)
    if "error" in obj:
        error = obj["error"]
        raise SemanticError(error if isinstance(error, str) else dump(error))
    return obj


def decode_watch_list(obj: Any) -> WatchList:
    """Decode a watch-list response."""
    obj = check_error(obj)
    roots = obj.get("roots")
    _require(isinstance(roots, list), "Got bogus value from watch-list: %s", obj)
    for root in roots:
        _require(isinstance(root, str), "Got non-string root from watch-list: %s", root)
    return WatchList(roots=roots)


def decode_stat(value: Any) -> Stat:
    """Decode one entry of a query's files list.

    A bare string is a file name; this is what the daemon sends when only
    names were requested.
    """
    if isinstance(value, str):
        return Stat(name=value)

    _require(isinstance(value, dict), "File entry must be object: %s", value)

    name = value.get("name")
    _require(isinstance(name, str), "File name must be string: %s", value)
    stat = Stat(name=name)

    if "exists" in value:
        _require(isinstance(value["exists"], bool), "Bad exists: %s", value)
        stat.exists = value["exists"]
    if "mode" in value:
        _require(_is_int(value["mode"]), "Bad mode: %s", value)
        stat.mode = value["mode"]
    if "new" in value:
        _require(isinstance(value["new"], bool), "Bad new: %s", value)
        stat.newer = value["new"]
    if "size" in value:
        _require(_is_int(value["size"]), "Bad size: %s", value)
        stat.size = value["size"]
    return stat


def decode_query_result(obj: Any) -> QueryResult:
    """Decode a query response.

    Raises:
        SchemaError: If any part of the response has the wrong shape; no
            partial result is returned
        SemanticError: If the daemon reported an error
    """
    obj = check_error(obj)

    files = obj.get("files")
    _require(isinstance(files, list), "Bad files: %s", obj)
    stats = [decode_stat(entry) for entry in files]

    version = obj.get("version")
    _require(isinstance(version, str), "Bad version: %s", obj)

    clock = obj.get("clock")
    _require(isinstance(clock, str), "Bad clock: %s", obj)

    fresh = obj.get("is_fresh_instance")
    _require(isinstance(fresh, bool), "Bad is_fresh_instance: %s", obj)

    return QueryResult(
        files=stats, version=version, clock=clock, is_fresh_instance=fresh
    )
