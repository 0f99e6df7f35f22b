"""Memory adapters for testing and development."""

from __future__ import annotations

from .console import ConsoleDiagnosticsSink
from .credentials import CredentialRecord, InMemoryCredentialStore
from .fake import InMemoryDeploymentClient, SentDeployment
from .sink import InMemoryDiagnosticsSink

__all__ = [
    "ConsoleDiagnosticsSink",
    "CredentialRecord",
    "InMemoryCredentialStore",
    "InMemoryDeploymentClient",
    "InMemoryDiagnosticsSink",
    "SentDeployment",
]
