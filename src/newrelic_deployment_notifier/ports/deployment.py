"""Deployment client port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import SecretStr

from .diagnostics import IDiagnosticsSink


@runtime_checkable
class IDeploymentClient(Protocol):
    """
    Sends one deployment marker per call, either through the legacy
    application API or the entity (change tracking) API.

    Implementations raise ``NotificationError`` on failure and never retry.
    """

    def endpoint_for(self, european: bool) -> str:
        """Base URL of the regional API host."""
        ...

    def send_legacy(
        self,
        secret: SecretStr,
        application_id: str,
        description: str,
        revision: str,
        changelog: str,
        user: str,
        european: bool,
    ) -> None:
        """Record a deployment against an application ID."""
        ...

    def send_entity(
        self,
        secret: SecretStr,
        changelog: str,
        commit: str,
        deeplink: str,
        deployment_type: str,
        description: str,
        entity_guid: str,
        group_id: str,
        timestamp: str,
        user: str,
        version: str,
        european: bool,
        sink: IDiagnosticsSink,
    ) -> None:
        """Record a deployment against an entity GUID."""
        ...
