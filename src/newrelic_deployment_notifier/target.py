"""Deployment notification target, one configured New Relic deployment marker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .delivery import DeploymentProtocol

_TEXT_FIELDS = (
    "api_key_id",
    "application_id",
    "entity_guid",
    "description",
    "revision",
    "changelog",
    "user",
    "commit",
    "deeplink",
    "deployment_type",
    "group_id",
    "timestamp",
    "version",
)


class NotificationTarget(BaseModel):
    """Immutable notification configuration as persisted with the job.

    Every free-form field may contain ``$VAR`` / ``${VAR}`` references that are
    resolved against the build environment at dispatch time. ``application_id``
    is used literally.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    api_key_id: str = Field(
        default="",
        validation_alias=AliasChoices("apiKeyId", "apiKey", "api_key_id"),
        description="Reference to a stored credential, never the secret itself",
    )
    application_id: str = ""
    entity_guid: str = ""
    description: str = ""
    revision: str = ""
    changelog: str = ""
    user: str = ""
    commit: str = ""
    deeplink: str = ""
    deployment_type: str = ""
    group_id: str = ""
    timestamp: str = ""
    version: str = ""
    european: bool = False

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("european", mode="before")
    @classmethod
    def _coerce_region(cls, value: Any) -> Any:
        return False if value is None else value


@dataclass(frozen=True)
class ResolvedTarget:
    """Template-expanded values of one target for a single dispatch."""

    api_key_id: str
    application_id: str
    entity_guid: str
    description: str
    revision: str
    changelog: str
    user: str
    commit: str
    deeplink: str
    deployment_type: str
    group_id: str
    timestamp: str
    version: str
    european: bool

    @property
    def protocol(self) -> DeploymentProtocol:
        if self.entity_guid:
            return DeploymentProtocol.ENTITY
        return DeploymentProtocol.APPLICATION

    @property
    def label(self) -> str:
        """Human-readable identifier used in diagnostics."""
        if self.protocol is DeploymentProtocol.ENTITY:
            return f"Entity GUID: {self.entity_guid}"
        return f"Application ID: {self.application_id}"
