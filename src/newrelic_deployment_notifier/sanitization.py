"""Header and payload sanitization to keep API keys out of logs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "api-key",
        "x-api-key",
        "api_key",
        "authorization",
        "password",
        "secret",
        "token",
    }
)


class PayloadSanitizer:
    """
    Returns copies of request headers/payloads with secret values redacted.

    Field matching is case-insensitive and applies at any nesting depth.
    """

    def __init__(self, *, sensitive_fields: set[str] | None = None) -> None:
        sensitive = set(sensitive_fields or _DEFAULT_SENSITIVE_FIELDS)
        self._sensitive_fields = {f.lower() for f in sensitive}

    def sanitize(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Return a sanitized copy of ``data`` safe for logging."""
        return self._sanitize_dict(data)

    def _sanitize_dict(self, data: Mapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            result[str(key)] = self._sanitize_value(value, str(key).lower())
        return result

    def _sanitize_value(self, value: Any, field_name: str) -> Any:
        if isinstance(value, Mapping):
            return self._sanitize_dict(value)
        if isinstance(value, list):
            return [self._sanitize_value(item, field_name) for item in value]
        if field_name in self._sensitive_fields:
            return "***"
        return value


default_sanitizer = PayloadSanitizer()
