"""In-memory credential store."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from pydantic import SecretStr

from newrelic_deployment_notifier.ports.credentials import ICredentialResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CredentialRecord:
    """A stored API key.

    ``scope`` of None makes the record visible to every job; ``hostname``
    restricts it to one API host.
    """

    credential_id: str
    secret: SecretStr
    scope: Any = None
    hostname: str | None = None

    def matches(self, scope: Any, credential_id: str, host: str | None) -> bool:
        if self.credential_id != credential_id:
            return False
        if self.scope is not None and self.scope != scope:
            return False
        return self.hostname is None or self.hostname == host


class InMemoryCredentialStore(ICredentialResolver):
    """
    Dictionary-style credential resolver for tests and simple hosts.

    Scoped records win over global ones with the same ID.
    """

    def __init__(self, records: Iterable[CredentialRecord] = ()) -> None:
        self._records: list[CredentialRecord] = list(records)
        self.lookups: list[tuple[Any, str, str]] = []

    def add(
        self,
        credential_id: str,
        secret: str | SecretStr,
        *,
        scope: Any = None,
        hostname: str | None = None,
    ) -> None:
        if not isinstance(secret, SecretStr):
            secret = SecretStr(secret)
        self._records.append(CredentialRecord(credential_id, secret, scope, hostname))

    def resolve(self, scope: Any, credential_id: str, endpoint: str) -> SecretStr | None:
        self.lookups.append((scope, credential_id, endpoint))
        host = urlparse(endpoint).hostname
        candidates = sorted(self._records, key=lambda r: r.scope is None)
        for record in candidates:
            if record.matches(scope, credential_id, host):
                return record.secret
        logger.debug(f"No credential {credential_id!r} for scope {scope!r} at {host}")
        return None
