"""Credential resolution port."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import SecretStr


@runtime_checkable
class ICredentialResolver(Protocol):
    """
    Protocol for looking up the API key behind a credential reference.

    Storage, scoping and access control belong to the host.
    """

    def resolve(self, scope: Any, credential_id: str, endpoint: str) -> SecretStr | None:
        """Return the secret usable against ``endpoint``, or None when unavailable."""
        ...
