"""Test configuration for newrelic-deployment-notifier."""

import pytest

from newrelic_deployment_notifier.build import BuildContext, BuildResult
from newrelic_deployment_notifier.dispatcher import DeploymentDispatcher
from newrelic_deployment_notifier.memory import (
    InMemoryCredentialStore,
    InMemoryDeploymentClient,
    InMemoryDiagnosticsSink,
)
from newrelic_deployment_notifier.target import NotificationTarget


@pytest.fixture
def sink():
    """Diagnostics sink recording every message."""
    return InMemoryDiagnosticsSink()


@pytest.fixture
def client():
    """Fake deployment client recording every send."""
    return InMemoryDeploymentClient()


@pytest.fixture
def credentials():
    """Credential store holding one global API key."""
    store = InMemoryCredentialStore()
    store.add("nr-key", "KEY1")
    return store


@pytest.fixture
def dispatcher(client, credentials):
    return DeploymentDispatcher(client, credentials)


@pytest.fixture
def build_context():
    """Successful build with a small environment."""
    return BuildContext(
        result=BuildResult.SUCCESS,
        environment={"GIT_COMMIT": "abc123", "BUILD_NUMBER": "17", "BUILD_USER": "jenkins"},
        scope="my-job",
    )


@pytest.fixture
def make_target():
    """Factory for targets using the stored API key by default."""

    def _make(**kwargs):
        kwargs.setdefault("api_key_id", "nr-key")
        return NotificationTarget(**kwargs)

    return _make
