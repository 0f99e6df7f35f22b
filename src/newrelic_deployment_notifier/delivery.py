"""Delivery outcome types and protocol enum."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class DeploymentProtocol(Enum):
    """Wire protocol used to record a deployment."""

    APPLICATION = "application"
    ENTITY = "entity"


class DeliveryStatus(Enum):
    """Outcome of one target's notification."""

    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class TargetOutcome:
    """Immutable record of a single target's notification attempt."""

    label: str
    protocol: DeploymentProtocol
    status: DeliveryStatus
    error: str | None = None
    finished_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.finished_at is None:
            object.__setattr__(self, "finished_at", datetime.now(timezone.utc))

    @property
    def succeeded(self) -> bool:
        return self.status is DeliveryStatus.SENT

    @classmethod
    def sent(cls, label: str, protocol: DeploymentProtocol) -> TargetOutcome:
        """Create a successful outcome."""
        return cls(label=label, protocol=protocol, status=DeliveryStatus.SENT)

    @classmethod
    def failed(
        cls,
        label: str,
        protocol: DeploymentProtocol,
        error: str | None = None,
    ) -> TargetOutcome:
        """Create a failed outcome."""
        return cls(label=label, protocol=protocol, status=DeliveryStatus.FAILED, error=error)


@dataclass
class DispatchReport:
    """Ordered outcomes of one dispatch."""

    outcomes: list[TargetOutcome] = field(default_factory=list)

    def record(self, outcome: TargetOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def failures(self) -> list[TargetOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def succeeded(self) -> bool:
        """True when every recorded target was notified."""
        return not self.failures
