"""Host-facing notifier bound to one job's notification configuration."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from .build import BuildContext
from .client import NewRelicDeploymentClient
from .dispatcher import DeploymentDispatcher
from .ports.credentials import ICredentialResolver
from .ports.deployment import IDeploymentClient
from .ports.diagnostics import IDiagnosticsSink
from .reporting import AggregateReporting, FireAndForgetReporting
from .target import NotificationTarget


class DeploymentNotifier:
    """
    Notifies New Relic about a deployment for every configured target.

    Two entry points share the same dispatch loop:

    * ``perform_build`` skips failed or aborted builds and returns whether
      every target was notified.
    * ``perform_run`` has no build-result guard and returns nothing;
      failures only show up in the diagnostics sink.

    Example:
        ```python
        notifier = DeploymentNotifier.from_config(
            [{"apiKeyId": "nr-key", "applicationId": "42", "revision": "$GIT_COMMIT"}],
            credentials=store,
        )
        ok = notifier.perform_build(BuildContext(environment=env), sink)
        ```
    """

    def __init__(
        self,
        notifications: Iterable[NotificationTarget],
        credentials: ICredentialResolver,
        client_factory: Callable[[], IDeploymentClient] = NewRelicDeploymentClient,
    ):
        self.notifications: tuple[NotificationTarget, ...] = tuple(notifications)
        self.credentials = credentials
        self.client_factory = client_factory

    @classmethod
    def from_config(
        cls,
        notifications: Iterable[Mapping[str, Any]],
        credentials: ICredentialResolver,
        client_factory: Callable[[], IDeploymentClient] = NewRelicDeploymentClient,
    ) -> DeploymentNotifier:
        """Build a notifier from persisted (camelCase) target records."""
        targets = [NotificationTarget.model_validate(n) for n in notifications]
        return cls(targets, credentials, client_factory)

    def perform_build(self, context: BuildContext, sink: IDiagnosticsSink) -> bool:
        """Legacy entry point: True only if the build succeeded and every target was notified."""
        return self._dispatcher().dispatch(context, self.notifications, sink, AggregateReporting())

    def perform_run(self, context: BuildContext, sink: IDiagnosticsSink) -> None:
        """Modern entry point: attempt every target, report through ``sink`` only."""
        self._dispatcher().dispatch(context, self.notifications, sink, FireAndForgetReporting())

    def _dispatcher(self) -> DeploymentDispatcher:
        return DeploymentDispatcher(self.client_factory(), self.credentials)
