"""Tests for the host-facing notifier entry points."""

import json

import httpx

from newrelic_deployment_notifier.build import BuildContext, BuildResult
from newrelic_deployment_notifier.client import NewRelicDeploymentClient
from newrelic_deployment_notifier.delivery import DeploymentProtocol
from newrelic_deployment_notifier.memory import InMemoryDeploymentClient
from newrelic_deployment_notifier.notifier import DeploymentNotifier
from newrelic_deployment_notifier.target import NotificationTarget


def test_from_config_validates_persisted_records(credentials):
    notifier = DeploymentNotifier.from_config(
        [
            {"apiKeyId": "nr-key", "applicationId": 42, "revision": "$GIT_COMMIT"},
            {"apiKey": "nr-key", "entityGuid": "MXxBUE18", "european": True},
        ],
        credentials=credentials,
    )

    assert notifier.notifications == (
        NotificationTarget(api_key_id="nr-key", application_id="42", revision="$GIT_COMMIT"),
        NotificationTarget(api_key_id="nr-key", entity_guid="MXxBUE18", european=True),
    )


def test_perform_build_returns_aggregate(credentials, sink, build_context):
    """Legacy entry point: True only when every target was notified."""
    client = InMemoryDeploymentClient()
    notifier = DeploymentNotifier(
        [NotificationTarget(api_key_id="nr-key", application_id="42", revision="$GIT_COMMIT")],
        credentials,
        client_factory=lambda: client,
    )

    assert notifier.perform_build(build_context, sink) is True
    assert client.sent[0].fields["revision"] == "abc123"

    client.fail_for("42")
    assert notifier.perform_build(build_context, sink) is False


def test_perform_build_skips_failed_build(credentials, sink):
    client = InMemoryDeploymentClient()
    notifier = DeploymentNotifier(
        [NotificationTarget(api_key_id="nr-key", application_id="42")],
        credentials,
        client_factory=lambda: client,
    )

    assert notifier.perform_build(BuildContext(result=BuildResult.ABORTED), sink) is False
    assert client.sent == []


def test_perform_run_notifies_failed_build_and_returns_nothing(credentials, sink):
    """Modern entry point has no build-result guard."""
    client = InMemoryDeploymentClient()
    notifier = DeploymentNotifier(
        [NotificationTarget(api_key_id="nr-key", entity_guid="MXxBUE18")],
        credentials,
        client_factory=lambda: client,
    )

    assert notifier.perform_run(BuildContext(result=BuildResult.FAILURE), sink) is None
    client.assert_sent("MXxBUE18", DeploymentProtocol.ENTITY)
    assert sink.infos == ["Notified New Relic. Entity GUID: MXxBUE18"]


def test_client_factory_called_per_dispatch(credentials, sink, build_context):
    created = []

    def factory():
        client = InMemoryDeploymentClient()
        created.append(client)
        return client

    notifier = DeploymentNotifier(
        [NotificationTarget(api_key_id="nr-key", application_id="42")],
        credentials,
        client_factory=factory,
    )
    notifier.perform_build(build_context, sink)
    notifier.perform_run(build_context, sink)

    assert len(created) == 2
    assert all(len(c.sent) == 1 for c in created)


def test_end_to_end_over_http(credentials, sink, build_context):
    """Both protocols through the real client against a mock transport."""
    requests = []

    def handler(request):
        requests.append(request)
        if request.url.path == "/graphql":
            return httpx.Response(200, json={"data": {"changeTrackingCreateDeployment": {}}})
        return httpx.Response(201, json={"deployment": {"id": 1}})

    http = httpx.Client(transport=httpx.MockTransport(handler))
    notifier = DeploymentNotifier(
        [
            NotificationTarget(api_key_id="nr-key", application_id="42", description="Build $BUILD_NUMBER"),
            NotificationTarget(api_key_id="nr-key", entity_guid="MXxBUE18", version="1.$BUILD_NUMBER", european=True),
        ],
        credentials,
        client_factory=lambda: NewRelicDeploymentClient(http_client=http),
    )

    assert notifier.perform_build(build_context, sink) is True

    legacy, entity = requests
    assert str(legacy.url) == "https://api.newrelic.com/v2/applications/42/deployments.json"
    assert json.loads(legacy.content)["deployment"]["description"] == "Build 17"
    assert str(entity.url) == "https://api.eu.newrelic.com/graphql"
    assert json.loads(entity.content)["variables"]["deployment"]["version"] == "1.17"
