"""Exceptions raised by the watchman client."""

from __future__ import annotations

import json
from typing import Any


class WatchmanError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class WatchmanConnectionError(WatchmanError, ConnectionError):
    """Transport could not be established or was closed."""


class DiscoveryError(WatchmanConnectionError):
    """Socket name discovery failed."""


class ConfigError(WatchmanError):
    """The configuration file could not be loaded."""


class WatchmanTimeoutError(WatchmanConnectionError):
    """A send or receive exceeded the configured timeout."""


class ProtocolError(WatchmanError):
    """Malformed or incomplete data on the wire."""


class SemanticError(WatchmanError):
    """The daemon answered with an error."""


class SchemaError(WatchmanError):
    """A response had an unexpected shape."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


def dump(value: Any) -> str:
    """Render a JSON value for diagnostics."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
