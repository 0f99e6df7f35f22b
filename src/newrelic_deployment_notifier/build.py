"""Build outcome and environment snapshot handed to the dispatcher."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BuildResult(Enum):
    """Outcome of the build that triggered the notification."""

    SUCCESS = "success"
    UNSTABLE = "unstable"
    FAILURE = "failure"
    NOT_BUILT = "not_built"
    ABORTED = "aborted"

    @property
    def is_unsuccessful(self) -> bool:
        return self in (BuildResult.FAILURE, BuildResult.ABORTED)


@dataclass(frozen=True)
class BuildContext:
    """Immutable view of one build, owned by the host.

    ``build_variables`` take precedence over ``environment`` when both define
    the same name. ``scope`` is opaque and only forwarded to the credential
    resolver.
    """

    result: BuildResult = BuildResult.SUCCESS
    environment: Mapping[str, str] = field(default_factory=dict)
    build_variables: Mapping[str, str] = field(default_factory=dict)
    scope: Any = None

    def effective_environment(self) -> dict[str, str]:
        """Return a fresh merged snapshot of environment and build variables."""
        merged = dict(self.environment)
        merged.update(self.build_variables)
        return merged
