"""Port definitions for the deployment notifier."""

from __future__ import annotations

from .credentials import ICredentialResolver
from .deployment import IDeploymentClient
from .diagnostics import IDiagnosticsSink

__all__ = [
    "IDeploymentClient",
    "ICredentialResolver",
    "IDiagnosticsSink",
]
