"""Tests for watchman commands against a fake daemon."""

import pytest

from wmclient.commands import (
    connect,
    query,
    read_and_handle_errors,
    send_simple_command,
    watch,
    watch_del,
    watch_list,
)
from wmclient.errors import ProtocolError, SchemaError, SemanticError
from wmclient.fields import QueryField
from wmclient.models.config import Config, ConnectionConfig
from wmclient.models.expression import AllOf, Exists, Name, Suffix


class TestWatch:
    def test_watch(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"version": "4.9.0", "watch": "/src"})

        watch(conn, "/src")

        assert daemon.received() == ["watch", "/src"]

    def test_watch_error(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"version": "4.9.0", "error": "root not watched"})

        with pytest.raises(SemanticError) as excinfo:
            watch(conn, "/src")
        assert excinfo.value.message == "root not watched"

    def test_watch_del(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"version": "4.9.0", "watch-del": True, "root": "/src"})

        watch_del(conn, "/src")

        assert daemon.received() == ["watch-del", "/src"]

    def test_watch_del_error(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"error": "root not watched"})

        with pytest.raises(SemanticError, match="^root not watched$"):
            watch_del(conn, "/src")

    def test_non_object_reply(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply(["unexpected"])

        with pytest.raises(SchemaError):
            watch(conn, "/src")


class TestGenericCommands:
    def test_send_simple_command(self, daemon_pair):
        conn, daemon = daemon_pair
        send_simple_command(conn, ["watch-project", "/src"])
        assert daemon.received() == ["watch-project", "/src"]

    def test_read_and_handle_errors(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"version": "4.9.0"})
        read_and_handle_errors(conn)

    def test_read_and_handle_errors_error(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"error": "root not watched"})

        with pytest.raises(SemanticError) as excinfo:
            read_and_handle_errors(conn)
        assert excinfo.value.message == "root not watched"

    def test_garbage_reply(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.send_raw(b"not json\n")

        with pytest.raises(ProtocolError):
            read_and_handle_errors(conn)


class TestWatchList:
    def test_watch_list(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"version": "4.9.0", "roots": ["/a", "/b"]})

        result = watch_list(conn)

        assert daemon.received() == ["watch-list"]
        assert result.roots == ["/a", "/b"]

    def test_bad_root(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"roots": ["/a", None]})

        with pytest.raises(SchemaError, match="non-string root"):
            watch_list(conn)


class TestQuery:
    def test_query(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply(
            {
                "version": "4.9.0",
                "clock": "c:1:2:3:4",
                "is_fresh_instance": True,
                "files": ["a.txt", {"name": "b.txt", "exists": True, "size": 42}],
            }
        )

        expr = AllOf(clauses=[Suffix(suffix="txt"), Exists()])
        result = query(conn, "/src", expr, QueryField.NAME | QueryField.EXISTS)

        assert daemon.received() == [
            "query",
            "/src",
            {
                "expression": ["allof", ["suffix", "txt"], ["exists"]],
                "fields": ["name", "exists"],
            },
        ]
        assert result.nr == 2
        assert result.files[1].size == 42
        assert result.clock == "c:1:2:3:4"
        assert result.is_fresh_instance is True

    def test_query_default_fields(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply(
            {"version": "4.9.0", "clock": "c:1", "is_fresh_instance": False, "files": []}
        )

        query(conn, "/src", Name(names="Makefile"))

        command = daemon.received()
        assert command[2]["expression"] == ["name", "Makefile"]
        assert command[2]["fields"] == ["name", "exists", "size", "new"]

    def test_query_missing_clock(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"version": "4.9.0", "is_fresh_instance": False, "files": []})

        with pytest.raises(SchemaError, match="Bad clock"):
            query(conn, "/src", Exists())

    def test_query_error(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"version": "4.9.0", "error": "root not watched"})

        with pytest.raises(SemanticError, match="root not watched"):
            query(conn, "/src", Exists())

    def test_connection_reusable_after_error(self, daemon_pair):
        conn, daemon = daemon_pair
        daemon.reply({"error": "root not watched"})
        daemon.reply({"roots": []})

        with pytest.raises(SemanticError):
            watch(conn, "/src")
        assert watch_list(conn).roots == []


class TestConnect:
    def test_uses_configured_socket(self, monkeypatch, tmp_path):
        opened = {}

        def fake_open(socket_path, timeout=None):
            opened["path"] = socket_path
            opened["timeout"] = timeout
            return "connection"

        monkeypatch.setattr("wmclient.commands.Connection.open", fake_open)
        config = Config(
            connection=ConnectionConfig(socket_path=tmp_path / "sock", timeout=2.5)
        )

        assert connect(config) == "connection"
        assert opened == {"path": tmp_path / "sock", "timeout": 2.5}
