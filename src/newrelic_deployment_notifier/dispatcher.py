"""Deployment dispatcher: sends one notification per configured target."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

from pydantic import SecretStr

from .build import BuildContext
from .delivery import DeploymentProtocol, DispatchReport, TargetOutcome
from .exceptions import BuildStateError, ConfigurationError, CredentialError, NotificationError
from .ports.credentials import ICredentialResolver
from .ports.deployment import IDeploymentClient
from .ports.diagnostics import IDiagnosticsSink
from .reporting import ReportingStrategy
from .target import NotificationTarget, ResolvedTarget
from .template import resolve_target

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DeploymentDispatcher:
    """
    Runs one build's notifications: guards, then each target in order.

    A failing target never stops the batch. Only the build-result guard and
    the empty-configuration guard prevent network calls altogether.
    The dispatcher keeps no state between calls.
    """

    def __init__(self, client: IDeploymentClient, credentials: ICredentialResolver):
        self.client = client
        self.credentials = credentials

    def dispatch(
        self,
        context: BuildContext,
        targets: Sequence[NotificationTarget] | None,
        sink: IDiagnosticsSink,
        reporting: ReportingStrategy[T],
    ) -> T:
        """Dispatch all targets and let ``reporting`` shape the result."""
        try:
            checked = self._check_guards(context, targets, reporting)
        except BuildStateError as e:
            logger.info(f"Skipping deployment notifications: build result {context.result.value}")
            sink.error(str(e))
            return reporting.abort()
        except ConfigurationError as e:
            logger.error(f"Deployment notifier misconfigured: {e}")
            sink.fatal_error(str(e))
            return reporting.abort()

        report = self.run(context, checked, sink)
        logger.debug(
            f"Dispatched {len(report.outcomes)} deployment notifications, "
            f"{len(report.failures)} failed"
        )
        return reporting.finish(report)

    def run(
        self,
        context: BuildContext,
        targets: Sequence[NotificationTarget],
        sink: IDiagnosticsSink,
    ) -> DispatchReport:
        """Notify every target sequentially without any guard."""
        env = context.effective_environment()
        report = DispatchReport()
        for target in targets:
            report.record(self._notify(context, resolve_target(target, env), sink))
        return report

    def _check_guards(
        self,
        context: BuildContext,
        targets: Sequence[NotificationTarget] | None,
        reporting: ReportingStrategy[T],
    ) -> Sequence[NotificationTarget]:
        if reporting.guard_build_result and context.result.is_unsuccessful:
            raise BuildStateError(context.result.value)
        if not targets:
            raise ConfigurationError("Missing notifications!")
        return targets

    def _notify(
        self,
        context: BuildContext,
        target: ResolvedTarget,
        sink: IDiagnosticsSink,
    ) -> TargetOutcome:
        try:
            secret = self._resolve_secret(context, target)
            self._send(target, secret, sink)
        except CredentialError as e:
            logger.warning(f"No credential '{target.api_key_id}' for {target.label}")
            sink.error(str(e))
            return TargetOutcome.failed(target.label, target.protocol, error=str(e))
        except NotificationError as e:
            logger.error(f"Failed to notify New Relic for {target.label}", exc_info=True)
            sink.error(f"Failed to notify New Relic. {target.label}: {e}")
            return TargetOutcome.failed(target.label, target.protocol, error=str(e))

        sink.info(f"Notified New Relic. {target.label}")
        return TargetOutcome.sent(target.label, target.protocol)

    def _resolve_secret(self, context: BuildContext, target: ResolvedTarget) -> SecretStr:
        endpoint = self.client.endpoint_for(target.european)
        secret = self.credentials.resolve(context.scope, target.api_key_id, endpoint)
        if secret is None:
            raise CredentialError(target.api_key_id, target.label)
        return secret

    def _send(self, target: ResolvedTarget, secret: SecretStr, sink: IDiagnosticsSink) -> None:
        if target.protocol is DeploymentProtocol.ENTITY:
            self.client.send_entity(
                secret,
                changelog=target.changelog,
                commit=target.commit,
                deeplink=target.deeplink,
                deployment_type=target.deployment_type,
                description=target.description,
                entity_guid=target.entity_guid,
                group_id=target.group_id,
                timestamp=target.timestamp,
                user=target.user,
                version=target.version,
                european=target.european,
                sink=sink,
            )
        else:
            self.client.send_legacy(
                secret,
                application_id=target.application_id,
                description=target.description,
                revision=target.revision,
                changelog=target.changelog,
                user=target.user,
                european=target.european,
            )
