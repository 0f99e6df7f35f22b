"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_API_HOST = "https://api.newrelic.com"
EU_API_HOST = "https://api.eu.newrelic.com"


@dataclass(frozen=True)
class NewRelicApiConfig:
    """Connection settings for the New Relic API.

    Attributes:
        default_host: Base URL used when the target is not in the EU region.
        eu_host: Base URL used for EU-region targets.
        timeout: Transport timeout in seconds, applied per request.
        user_agent: Value of the ``User-Agent`` header.
    """

    default_host: str = DEFAULT_API_HOST
    eu_host: str = EU_API_HOST
    timeout: float = 10.0
    user_agent: str = "newrelic-deployment-notifier/0.1.0"

    def host_for(self, european: bool) -> str:
        return (self.eu_host if european else self.default_host).rstrip("/")
