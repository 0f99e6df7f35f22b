"""Diagnostics sink port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IDiagnosticsSink(Protocol):
    """Write-only channel for human-readable build messages."""

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def fatal_error(self, message: str) -> None: ...
