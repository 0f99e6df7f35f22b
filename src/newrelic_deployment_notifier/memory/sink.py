"""In-memory diagnostics sink for test assertions."""

from __future__ import annotations

from dataclasses import dataclass

from newrelic_deployment_notifier.ports.diagnostics import IDiagnosticsSink


@dataclass(frozen=True)
class Diagnostic:
    """One recorded diagnostic line."""

    level: str
    message: str


class InMemoryDiagnosticsSink(IDiagnosticsSink):
    """
    Test double (Fake) that keeps every diagnostic in order.
    """

    def __init__(self) -> None:
        self.messages: list[Diagnostic] = []

    def info(self, message: str) -> None:
        self.messages.append(Diagnostic("info", message))

    def error(self, message: str) -> None:
        self.messages.append(Diagnostic("error", message))

    def fatal_error(self, message: str) -> None:
        self.messages.append(Diagnostic("fatal", message))

    @property
    def infos(self) -> list[str]:
        return self._at("info")

    @property
    def errors(self) -> list[str]:
        return self._at("error")

    @property
    def fatal_errors(self) -> list[str]:
        return self._at("fatal")

    def _at(self, level: str) -> list[str]:
        return [m.message for m in self.messages if m.level == level]

    def clear(self) -> None:
        """Clear all recorded diagnostics."""
        self.messages.clear()
