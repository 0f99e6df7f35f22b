"""In-memory deployment client for test assertions."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import SecretStr

from newrelic_deployment_notifier.config import NewRelicApiConfig
from newrelic_deployment_notifier.delivery import DeploymentProtocol
from newrelic_deployment_notifier.exceptions import ProtocolError
from newrelic_deployment_notifier.ports.deployment import IDeploymentClient
from newrelic_deployment_notifier.ports.diagnostics import IDiagnosticsSink

logger = logging.getLogger(__name__)


@dataclass
class SentDeployment:
    """Record of one send call for test assertions."""

    protocol: DeploymentProtocol
    identifier: str
    secret: str
    european: bool
    fields: dict[str, str]


class InMemoryDeploymentClient(IDeploymentClient):
    """
    Test double (Fake) that records every send instead of calling the API.

    Identifiers registered with ``fail_for`` raise ``ProtocolError`` after the
    call has been recorded.
    """

    def __init__(self, config: NewRelicApiConfig | None = None) -> None:
        self.config = config or NewRelicApiConfig()
        self.sent: list[SentDeployment] = []
        self._failures: dict[str, str] = {}

    def fail_for(self, identifier: str, detail: str = "Internal Server Error") -> None:
        self._failures[identifier] = detail

    def endpoint_for(self, european: bool) -> str:
        return self.config.host_for(european)

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
        self.sent.append(
            SentDeployment(
                DeploymentProtocol.APPLICATION,
                application_id,
                secret.get_secret_value(),
                european,
                {
                    "description": description,
                    "revision": revision,
                    "changelog": changelog,
                    "user": user,
                },
            )
        )
        if application_id in self._failures:
            raise ProtocolError(self.endpoint_for(european), "HTTP 500", status_code=500)

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
        self.sent.append(
            SentDeployment(
                DeploymentProtocol.ENTITY,
                entity_guid,
                secret.get_secret_value(),
                european,
                {
                    "changelog": changelog,
                    "commit": commit,
                    "deeplink": deeplink,
                    "deployment_type": deployment_type,
                    "description": description,
                    "group_id": group_id,
                    "timestamp": timestamp,
                    "user": user,
                    "version": version,
                },
            )
        )
        if entity_guid in self._failures:
            detail = self._failures[entity_guid]
            sink.error(f"New Relic API error: {detail}")
            raise ProtocolError(self.endpoint_for(european), "HTTP 500", status_code=500, detail=detail)

    def calls(self, protocol: DeploymentProtocol) -> list[SentDeployment]:
        return [s for s in self.sent if s.protocol is protocol]

    def assert_sent(self, identifier: str, protocol: DeploymentProtocol, count: int = 1) -> None:
        """Helper for test assertions."""
        matches = [s for s in self.calls(protocol) if s.identifier == identifier]
        if len(matches) != count:
            raise AssertionError(
                f"Expected {count} {protocol.value} deployments for {identifier}, "
                f"but found {len(matches)}."
            )

    def clear(self) -> None:
        """Clear all recorded sends."""
        self.sent.clear()
