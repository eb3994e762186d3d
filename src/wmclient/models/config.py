"""Configuration models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class ConnectionConfig(BaseModel):
    """Daemon connection configuration."""

    socket_path: Path | None = None
    sockname_command: list[str] = Field(
        default_factory=lambda: ["watchman", "get-sockname"]
    )
    timeout: float | None = Field(default=None, gt=0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["debug", "info", "warning", "error"] = "warning"
    file: Path | None = None


class Config(BaseModel):
    """Main configuration."""

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
