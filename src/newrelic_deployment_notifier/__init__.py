"""New Relic deployment notifications for build pipelines (legacy application API and change tracking)."""

from __future__ import annotations

from .build import BuildContext, BuildResult
from .client import NewRelicDeploymentClient
from .config import NewRelicApiConfig
from .delivery import DeliveryStatus, DeploymentProtocol, DispatchReport, TargetOutcome
from .diagnostics import LoggingDiagnosticsSink
from .dispatcher import DeploymentDispatcher
from .exceptions import (
    BuildStateError,
    ConfigurationError,
    CredentialError,
    DeploymentNotifierError,
    NotificationError,
    ProtocolError,
)
from .notifier import DeploymentNotifier
from .ports.credentials import ICredentialResolver
from .ports.deployment import IDeploymentClient
from .ports.diagnostics import IDiagnosticsSink
from .reporting import AggregateReporting, FireAndForgetReporting, ReportingStrategy
from .sanitization import PayloadSanitizer
from .target import NotificationTarget, ResolvedTarget
from .template import resolve, resolve_target

__version__ = "0.1.0"

__all__ = [
    "AggregateReporting",
    "BuildContext",
    "BuildResult",
    "BuildStateError",
    "ConfigurationError",
    "CredentialError",
    "DeliveryStatus",
    "DeploymentDispatcher",
    "DeploymentNotifier",
    "DeploymentNotifierError",
    "DeploymentProtocol",
    "DispatchReport",
    "FireAndForgetReporting",
    "ICredentialResolver",
    "IDeploymentClient",
    "IDiagnosticsSink",
    "LoggingDiagnosticsSink",
    "NewRelicApiConfig",
    "NewRelicDeploymentClient",
    "NotificationError",
    "NotificationTarget",
    "PayloadSanitizer",
    "ProtocolError",
    "ReportingStrategy",
    "ResolvedTarget",
    "TargetOutcome",
    "resolve",
    "resolve_target",
]
