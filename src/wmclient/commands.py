"""Watchman commands."""

from __future__ import annotations

import logging
from typing import Sequence

from wmclient.config import load_config
from wmclient.connection import Connection
from wmclient.decoders import check_error, decode_query_result, decode_watch_list
from wmclient.discovery import resolve_socket_path
from wmclient.fields import DEFAULT_FIELDS
from wmclient.models.config import Config
from wmclient.models.expression import Expression
from wmclient.models.results import QueryResult, WatchList
from wmclient.protocol import query_command, simple_command

logger = logging.getLogger("wmclient.commands")


def connect(config: Config | None = None) -> Connection:
    """Open a connection to the daemon described by the configuration."""
    if config is None:
        config = load_config()
    socket_path = resolve_socket_path(config)
    return Connection.open(socket_path, timeout=config.connection.timeout)


def send_simple_command(conn: Connection, tokens: Sequence[str]) -> None:
    """Send a command made only of string tokens."""
    conn.send(simple_command(tokens))


def read_and_handle_errors(conn: Connection) -> None:
    """Read a response that carries nothing but success or an error."""
    check_error(conn.receive())


def watch(conn: Connection, path: str) -> None:
    """Start watching a root."""
    logger.info(f"Watching {path}")
    send_simple_command(conn, ["watch", str(path)])
    read_and_handle_errors(conn)


def watch_del(conn: Connection, path: str) -> None:
    """Stop watching a root."""
    logger.info(f"Removing watch on {path}")
    send_simple_command(conn, ["watch-del", str(path)])
    read_and_handle_errors(conn)


def watch_list(conn: Connection) -> WatchList:
    """List watched roots."""
    send_simple_command(conn, ["watch-list"])
    return decode_watch_list(conn.receive())


def query(
    conn: Connection,
    root: str,
    expression: Expression,
    fields: int = DEFAULT_FIELDS,
) -> QueryResult:
    """Find files under a watched root that match an expression."""
    conn.send(query_command(root, expression, fields))
    result = decode_query_result(conn.receive())
    logger.debug(f"Query on {root} matched {result.nr} files at {result.clock}")
    return result
