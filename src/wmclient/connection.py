"""Connection to the watchman daemon."""

from __future__ import annotations

import logging
import socket
from pathlib import Path
from typing import Any

from wmclient.errors import ProtocolError, WatchmanConnectionError, WatchmanTimeoutError
from wmclient.protocol import encode_command, read_value


class Connection:
    """One open stream to the daemon.

    Only one command may be in flight at a time: each command is written and
    its response read before the next command is sent.
    """

    def __init__(self, sock: socket.socket, name: str = ""):
        self.name = name
        self.logger = logging.getLogger("wmclient.connection")
        self._sock: socket.socket | None = sock
        self._file = sock.makefile("rwb")

    @classmethod
    def open(cls, socket_path: Path | str, timeout: float | None = None) -> Connection:
        """Connect to the daemon's unix socket.

        Raises:
            ValueError: If timeout is not a positive number of seconds
            WatchmanConnectionError: If the socket cannot be reached
        """
        if timeout is not None and not timeout > 0:
            raise ValueError(f"Timeout must be a positive number of seconds, got {timeout}")

        socket_path = Path(socket_path).expanduser()
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(timeout)
        try:
            sock.connect(str(socket_path))
        except OSError as e:
            sock.close()
            raise WatchmanConnectionError(
                f"Failed to connect to watchman socket {socket_path}: {e}"
            ) from e

        conn = cls(sock, name=str(socket_path))
        conn.logger.debug(f"Connected to {socket_path}")
        return conn

    @property
    def closed(self) -> bool:
        return self._sock is None

    def close(self) -> None:
        """Close the connection. Closing twice does nothing."""
        if self._sock is None:
            return
        try:
            self._file.close()
        except OSError:
            # Unflushed data on a broken socket
            pass
        self._sock.close()
        self._sock = None
        self.logger.debug(f"Closed connection {self.name}")

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def send(self, command: Any) -> None:
        """Write one command followed by a newline.

        Raises:
            WatchmanConnectionError: If the connection is closed
            ProtocolError: If the command cannot be encoded or written
        """
        self._check_open()
        data = encode_command(command)
        self.logger.debug(f"Sending {data[:-1].decode('utf-8')}")
        try:
            self._file.write(data)
            self._file.flush()
        except socket.timeout as e:
            self.close()
            raise WatchmanTimeoutError("Timed out sending to watchman") from e
        except OSError as e:
            raise ProtocolError(f"Failed to send watchman command: {e}") from e

    def receive(self) -> Any:
        """Read one response value.

        Raises:
            WatchmanConnectionError: If the connection is closed
            WatchmanTimeoutError: If the configured timeout elapses
            ProtocolError: If the response is malformed
        """
        self._check_open()
        try:
            value = read_value(self._file)
        except socket.timeout as e:
            # Part of a response may have been consumed
            self.close()
            raise WatchmanTimeoutError("Timed out waiting for watchman") from e
        except WatchmanConnectionError:
            raise
        except OSError as e:
            raise WatchmanConnectionError(f"Failed to read from watchman: {e}") from e
        self.logger.debug(f"Received {value!r}")
        return value

    def _check_open(self) -> None:
        if self._sock is None:
            raise WatchmanConnectionError("Connection is closed")
