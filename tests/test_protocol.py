"""Tests for command framing and response reading."""

import io
import json

import pytest

from wmclient.errors import ProtocolError, WatchmanConnectionError
from wmclient.fields import QueryField
from wmclient.models.expression import AllOf, Exists, Suffix
from wmclient.protocol import encode_command, query_command, read_value, simple_command


class TestCommands:
    def test_simple_command(self):
        assert simple_command(["watch", "/src"]) == ["watch", "/src"]
        assert simple_command(("watch-list",)) == ["watch-list"]

    def test_simple_command_needs_a_name(self):
        with pytest.raises(ValueError):
            simple_command([])

    def test_simple_command_rejects_bare_string(self):
        with pytest.raises(TypeError):
            simple_command("watch-list")

    def test_query_command(self):
        expr = AllOf(clauses=[Suffix(suffix="py"), Exists()])
        command = query_command("/src", expr, QueryField.SIZE | QueryField.NAME)

        assert command == [
            "query",
            "/src",
            {
                "expression": ["allof", ["suffix", "py"], ["exists"]],
                "fields": ["name", "size"],
            },
        ]


class TestEncode:
    def test_compact_with_newline(self):
        data = encode_command(["query", "/src", {"fields": ["name"]}])
        assert data == b'["query","/src",{"fields":["name"]}]\n'

    def test_single_line(self):
        data = encode_command(["watch", "dir\nwith newline"])
        assert data.count(b"\n") == 1
        assert json.loads(data) == ["watch", "dir\nwith newline"]

    def test_unserializable(self):
        with pytest.raises(ProtocolError):
            encode_command(["watch", object()])


class TestReadValue:
    def test_reads_one_value(self):
        stream = io.BytesIO(b'{"version": "4.9.0"}\n')
        assert read_value(stream) == {"version": "4.9.0"}

    def test_leaves_following_values(self):
        stream = io.BytesIO(b'{"a": 1}\n{"b": 2}\n')

        assert read_value(stream) == {"a": 1}
        assert read_value(stream) == {"b": 2}

    def test_value_spanning_lines(self):
        stream = io.BytesIO(b'{"roots": [\n  "/a",\n  "/b"\n]}\n')
        assert read_value(stream) == {"roots": ["/a", "/b"]}

    def test_skips_blank_lines(self):
        stream = io.BytesIO(b'\n\n{"a": 1}\n')
        assert read_value(stream) == {"a": 1}

    def test_missing_newline(self):
        stream = io.BytesIO(b'{"a": 1}')
        with pytest.raises(ProtocolError, match="No newline at end of reply"):
            read_value(stream)

    def test_trailing_garbage(self):
        stream = io.BytesIO(b'{"a": 1} {"b": 2}\n')
        with pytest.raises(ProtocolError, match="No newline"):
            read_value(stream)

    def test_malformed(self):
        stream = io.BytesIO(b"{bogus}\n")
        with pytest.raises(ProtocolError, match="unparseable"):
            read_value(stream)

    def test_incomplete_at_end_of_stream(self):
        stream = io.BytesIO(b'{"a": [1, 2,\n')
        with pytest.raises(ProtocolError, match="incomplete"):
            read_value(stream)

    def test_empty_stream(self):
        with pytest.raises(WatchmanConnectionError):
            read_value(io.BytesIO(b""))

    def test_invalid_utf8(self):
        stream = io.BytesIO(b'"\xff\xfe"\n')
        with pytest.raises(ProtocolError):
            read_value(stream)

    def test_non_object_values(self):
        stream = io.BytesIO(b'[1, 2]\n"text"\n42\n')

        assert read_value(stream) == [1, 2]
        assert read_value(stream) == "text"
        assert read_value(stream) == 42

    def test_newline_inside_string_fails_at_once(self):
        stream = io.BytesIO(b'["abc\n{"a": 1}\n')

        with pytest.raises(ProtocolError, match="unparseable"):
            read_value(stream)
        # The broken line is the only one consumed
        assert read_value(stream) == {"a": 1}
