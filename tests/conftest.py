"""Shared fixtures: a fake daemon on the other end of a socket pair."""

from __future__ import annotations

import json
import socket
from typing import Any

import pytest

from wmclient.connection import Connection


class FakeDaemon:
    """Scripted peer for a Connection."""

    def __init__(self, sock: socket.socket):
        self.sock = sock
        self._reader = sock.makefile("rb")

    def reply(self, obj: Any) -> None:
        self.send_raw(json.dumps(obj).encode() + b"\n")

    def send_raw(self, data: bytes) -> None:
        self.sock.sendall(data)

    def received(self) -> Any:
        """Next command the client sent, decoded."""
        line = self._reader.readline()
        assert line.endswith(b"\n")
        return json.loads(line)

    def received_raw(self) -> bytes:
        return self._reader.readline()

    def close(self) -> None:
        self._reader.close()
        self.sock.close()


@pytest.fixture
def daemon_pair():
    """A client Connection and the FakeDaemon it talks to."""
    client_sock, server_sock = socket.socketpair()
    conn = Connection(client_sock, name="test")
    daemon = FakeDaemon(server_sock)
    yield conn, daemon
    conn.close()
    daemon.close()
