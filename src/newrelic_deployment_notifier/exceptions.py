"""Exception hierarchy for deployment notifications."""

from __future__ import annotations


class DeploymentNotifierError(Exception):
    """Root exception for the deployment notifier."""


class ConfigurationError(DeploymentNotifierError):
    """Raised when the notifier has nothing usable to dispatch (e.g. no targets)."""


class BuildStateError(DeploymentNotifierError):
    """Raised when the build did not succeed and notifications must be skipped."""

    def __init__(self, result: str):
        self.result = result
        super().__init__(f"Build unsuccessful ({result}). Skipping New Relic Deployment notification.")


class CredentialError(DeploymentNotifierError):
    """Raised when no secret could be resolved for a target."""

    def __init__(self, credential_id: str, target: str):
        self.credential_id = credential_id
        self.target = target
        super().__init__(f"Invalid credentials for {target}")


class NotificationError(DeploymentNotifierError):
    """Base exception for a failed deployment notification send."""


class ProtocolError(NotificationError):
    """Raised on a non-success response or a transport failure.

    ``status_code`` is ``None`` when the request never got a response.
    """

    def __init__(self, url: str, reason: str, status_code: int | None = None, detail: str | None = None):
        self.url = url
        self.status_code = status_code
        self.detail = detail
        message = f"POST {url} failed: {reason}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
