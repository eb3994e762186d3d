"""Decoded daemon responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Stat(BaseModel):
    """Per-file entry of a query result."""

    name: str
    exists: bool = False
    mode: int = 0
    newer: bool = False
    size: int = 0


class QueryResult(BaseModel):
    """Result of a query command."""

    files: list[Stat] = Field(default_factory=list)
    version: str
    clock: str
    is_fresh_instance: bool

    @property
    def nr(self) -> int:
        """Number of files in the result."""
        return len(self.files)


class WatchList(BaseModel):
    """Roots currently watched by the daemon."""

    roots: list[str] = Field(default_factory=list)
