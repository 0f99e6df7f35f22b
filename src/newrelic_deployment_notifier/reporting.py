"""Result-reporting strategies for the two host invocation styles."""

from __future__ import annotations

from typing import Protocol, TypeVar

from .delivery import DispatchReport

T_co = TypeVar("T_co", covariant=True)


class ReportingStrategy(Protocol[T_co]):
    """Decides which guards apply and what a dispatch returns to its host."""

    guard_build_result: bool

    def abort(self) -> T_co:
        """Value returned when a fatal guard stops the dispatch."""
        ...

    def finish(self, report: DispatchReport) -> T_co:
        """Value returned after every target was attempted."""
        ...


class AggregateReporting:
    """Legacy style: skip failed builds and return True only if all targets succeeded."""

    guard_build_result = True

    def abort(self) -> bool:
        return False

    def finish(self, report: DispatchReport) -> bool:
        return report.succeeded


class FireAndForgetReporting:
    """Modern style: no build-result guard, failures surface only as diagnostics."""

    guard_build_result = False

    def abort(self) -> None:
        return None

    def finish(self, report: DispatchReport) -> None:
        return None
