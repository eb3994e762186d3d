"""Line-delimited JSON protocol spoken by the watchman daemon.

Commands are JSON arrays whose first element is the command name:

    ["watch", "/path/to/root"]
    ["query", "/path/to/root", {"expression": [...], "fields": [...]}]

Every command and every response is a single JSON value followed by a
newline. Responses are JSON objects; an "error" key signals failure.
"""

from __future__ import annotations

import json
from typing import Any, BinaryIO, Sequence

from wmclient.compiler import compile_expression
from wmclient.errors import ProtocolError, WatchmanConnectionError
from wmclient.fields import fields_to_json
from wmclient.models.expression import Expression

_decoder = json.JSONDecoder()


def _needs_more_input(error: json.JSONDecodeError, buffer: str) -> bool:
    """Whether a parse error only means the value continues on the next line.

    JSON strings cannot hold a raw newline, so a line break inside a string
    ("Invalid control character") is malformed rather than unfinished.
    """
    return error.msg.startswith("Expecting") and error.pos >= len(buffer.rstrip())


def simple_command(tokens: Sequence[str]) -> list[str]:
    """Build a command made only of string tokens."""
    if isinstance(tokens, str):
        raise TypeError("tokens must be a sequence of strings, not a string")
    if not tokens:
        raise ValueError("A command needs at least a name")
    return [str(token) for token in tokens]


def query_command(root: str, expression: Expression, fields: int) -> list[Any]:
    """Build a query command for a watched root."""
    return [
        "query",
        str(root),
        {
            "expression": compile_expression(expression),
            "fields": fields_to_json(fields),
        },
    ]


def encode_command(command: Any) -> bytes:
    """Serialize a command to compact JSON terminated by a newline.

    Raises:
        ProtocolError: If the command is not JSON serializable
    """
    try:
        text = json.dumps(command, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise ProtocolError(f"Failed to encode watchman command {command!r}: {e}") from e
    return text.encode("utf-8") + b"\n"


def read_value(stream: BinaryIO) -> Any:
    """Read exactly one JSON value and its trailing newline from a stream.

    Reading stops as soon as a whole value is available, so anything the
    daemon sends afterwards stays in the stream for the next call.

    Raises:
        WatchmanConnectionError: If the stream ends before any data arrives
        ProtocolError: If the data is malformed, ends mid-value, or the value
            is not followed by a newline
    """
    buffer = ""
    while True:
        line = stream.readline()
        if not line:
            if buffer.strip():
                raise ProtocolError(
                    f"Got incomplete result from watchman: {buffer.strip()!r}"
                )
            raise WatchmanConnectionError("Connection closed by watchman")

        try:
            buffer += line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolError(f"Got non UTF-8 result from watchman: {e}") from e

        start = len(buffer) - len(buffer.lstrip())
        if start == len(buffer):
            continue

        try:
            value, end = _decoder.raw_decode(buffer, start)
        except json.JSONDecodeError as e:
            if _needs_more_input(e, buffer) and line.endswith(b"\n"):
                continue
            raise ProtocolError(
                f"Got unparseable or empty result from watchman: {e}"
            ) from e

        if buffer[end:end + 1] != "\n":
            raise ProtocolError("No newline at end of reply")
        return value
