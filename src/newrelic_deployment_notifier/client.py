"""New Relic deployment client using httpx."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from typing import Any

import httpx
from pydantic import SecretStr

from .config import NewRelicApiConfig
from .exceptions import ProtocolError
from .payloads import (
    GRAPHQL_PATH,
    entity_payload,
    extract_error_message,
    graphql_errors,
    legacy_path,
    legacy_payload,
)
from .ports.deployment import IDeploymentClient
from .ports.diagnostics import IDiagnosticsSink
from .sanitization import PayloadSanitizer, default_sanitizer

logger = logging.getLogger(__name__)


class NewRelicDeploymentClient(IDeploymentClient):
    """
    Synchronous client for the legacy application API and the entity
    (change tracking) API.

    Each send is a single POST; failures raise ``ProtocolError`` and are never
    retried. Without an injected ``http_client`` every send opens and closes
    its own ``httpx.Client``.
    """

    def __init__(
        self,
        config: NewRelicApiConfig | None = None,
        http_client: httpx.Client | None = None,
        sanitizer: PayloadSanitizer | None = None,
    ):
        self.config = config or NewRelicApiConfig()
        self.http_client = http_client
        self.sanitizer = sanitizer or default_sanitizer

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
        url = f"{self.endpoint_for(european)}{legacy_path(application_id)}"
        payload = legacy_payload(description, revision, changelog, user)
        response = self._post(url, payload, self._headers("X-Api-Key", secret))

        if not response.is_success:
            logger.error(f"Deployment API error for application {application_id}: HTTP {response.status_code}")
            raise ProtocolError(url, f"HTTP {response.status_code}", status_code=response.status_code)

        logger.info(f"Deployment recorded for application {application_id}")

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
        url = f"{self.endpoint_for(european)}{GRAPHQL_PATH}"
        payload = entity_payload(
            changelog=changelog,
            commit=commit,
            deeplink=deeplink,
            deployment_type=deployment_type,
            description=description,
            entity_guid=entity_guid,
            group_id=group_id,
            timestamp=timestamp,
            user=user,
            version=version,
        )
        response = self._post(url, payload, self._headers("API-Key", secret))

        if response.is_success:
            # NerdGraph reports mutation failures in the body of a 200
            detail = graphql_errors(response.text)
            if detail is None:
                logger.info(f"Deployment recorded for entity {entity_guid}")
                return
            reason = "GraphQL error"
        else:
            detail = extract_error_message(response.text)
            reason = f"HTTP {response.status_code}"

        if detail:
            logger.error(f"Deployment API error for entity {entity_guid}: {reason} - {detail}")
            sink.error(f"New Relic API error: {detail}")
        else:
            logger.error(f"Deployment API error for entity {entity_guid}: {reason}")
        raise ProtocolError(url, reason, status_code=response.status_code, detail=detail)

    def _headers(self, auth_header: str, secret: SecretStr) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
            auth_header: secret.get_secret_value(),
        }

    def _post(self, url: str, payload: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        logger.debug(f"POST {url} headers={self.sanitizer.sanitize(headers)} payload={payload}")
        try:
            with self._open() as client:
                return client.post(url, json=payload, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Failed to reach {url}: {e!r}")
            raise ProtocolError(url, str(e) or type(e).__name__) from e
        except (UnicodeEncodeError, ValueError) as e:
            # httpx encodes header values as ASCII while building the request
            logger.error(f"Could not build request for {url}: {type(e).__name__}")
            raise ProtocolError(url, "invalid request", detail=type(e).__name__) from e

    @contextlib.contextmanager
    def _open(self) -> Iterator[httpx.Client]:
        if self.http_client is not None:
            yield self.http_client
            return
        with httpx.Client(timeout=self.config.timeout) as client:
            yield client
