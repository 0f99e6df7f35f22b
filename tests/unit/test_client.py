"""Tests for the httpx deployment client."""

import json
import logging

import httpx
import pytest
from pydantic import SecretStr

from newrelic_deployment_notifier.client import NewRelicDeploymentClient
from newrelic_deployment_notifier.config import NewRelicApiConfig
from newrelic_deployment_notifier.exceptions import NotificationError, ProtocolError
from newrelic_deployment_notifier.memory import InMemoryDiagnosticsSink

SECRET = SecretStr("KEY1")


class RecordingTransport:
    """Mock handler that stores requests and replies with a fixed response."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)


def _client(handler, config=None):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return NewRelicDeploymentClient(config or NewRelicApiConfig(), http_client=http)


def _send_legacy(client, european=False):
    client.send_legacy(
        SECRET,
        application_id="42",
        description="My app",
        revision="abc123",
        changelog="",
        user="jenkins",
        european=european,
    )


def _send_entity(client, sink, european=False):
    client.send_entity(
        SECRET,
        changelog="",
        commit="abc123",
        deeplink="",
        deployment_type="BASIC",
        description="release",
        entity_guid="MXxBUE18",
        group_id="",
        timestamp="",
        user="jenkins",
        version="1.0.0",
        european=european,
        sink=sink,
    )


def test_endpoint_for_region():
    """Test region flag selects the EU host, otherwise the default host."""
    client = NewRelicDeploymentClient()

    assert client.endpoint_for(False) == "https://api.newrelic.com"
    assert client.endpoint_for(True) == "https://api.eu.newrelic.com"


def test_endpoint_for_configured_hosts():
    client = NewRelicDeploymentClient(
        NewRelicApiConfig(default_host="http://localhost:8080/", eu_host="http://eu.local")
    )

    assert client.endpoint_for(False) == "http://localhost:8080"
    assert client.endpoint_for(True) == "http://eu.local"


def test_send_legacy_posts_deployment():
    """Test the legacy API request shape."""
    transport = RecordingTransport(201, {"deployment": {"id": 1}})

    _send_legacy(_client(transport))

    (request,) = transport.requests
    assert request.method == "POST"
    assert str(request.url) == "https://api.newrelic.com/v2/applications/42/deployments.json"
    assert request.headers["X-Api-Key"] == "KEY1"
    assert json.loads(request.content) == {
        "deployment": {"revision": "abc123", "description": "My app", "user": "jenkins"}
    }


def test_send_legacy_eu_region():
    transport = RecordingTransport(201)

    _send_legacy(_client(transport), european=True)

    assert transport.requests[0].url.host == "api.eu.newrelic.com"


def test_send_legacy_failure_status():
    """Test non-2xx responses raise ProtocolError carrying the status code."""
    transport = RecordingTransport(403, {"error": {"title": "Forbidden"}})

    with pytest.raises(ProtocolError) as exc_info:
        _send_legacy(_client(transport))

    assert exc_info.value.status_code == 403
    assert "HTTP 403" in str(exc_info.value)
    assert len(transport.requests) == 1


def test_send_entity_posts_graphql_mutation():
    """Test the entity API request shape."""
    transport = RecordingTransport(
        200, {"data": {"changeTrackingCreateDeployment": {"deploymentId": "d-1", "entityGuid": "MXxBUE18"}}}
    )
    sink = InMemoryDiagnosticsSink()

    _send_entity(_client(transport), sink)

    (request,) = transport.requests
    assert str(request.url) == "https://api.newrelic.com/graphql"
    assert request.headers["API-Key"] == "KEY1"
    body = json.loads(request.content)
    assert "changeTrackingCreateDeployment" in body["query"]
    assert body["variables"]["deployment"]["entityGuid"] == "MXxBUE18"
    assert body["variables"]["deployment"]["deploymentType"] == "BASIC"
    assert sink.messages == []


def test_send_entity_eu_region():
    transport = RecordingTransport(200, {"data": {}})

    _send_entity(_client(transport), InMemoryDiagnosticsSink(), european=True)

    assert str(transport.requests[0].url) == "https://api.eu.newrelic.com/graphql"


def test_send_entity_failure_reports_error_body():
    """Test the parsed error body is written to the sink before raising."""
    transport = RecordingTransport(400, {"errors": [{"message": "Entity not found"}]})
    sink = InMemoryDiagnosticsSink()

    with pytest.raises(ProtocolError) as exc_info:
        _send_entity(_client(transport), sink)

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Entity not found"
    assert sink.errors == ["New Relic API error: Entity not found"]


def test_send_entity_graphql_errors_in_success_response():
    """A 200 carrying GraphQL errors is still a failed notification."""
    transport = RecordingTransport(200, {"data": None, "errors": [{"message": "Invalid version"}]})
    sink = InMemoryDiagnosticsSink()

    with pytest.raises(ProtocolError) as exc_info:
        _send_entity(_client(transport), sink)

    assert "GraphQL error" in str(exc_info.value)
    assert sink.errors == ["New Relic API error: Invalid version"]


def test_send_entity_failure_without_body():
    transport = RecordingTransport(502, "")
    sink = InMemoryDiagnosticsSink()

    with pytest.raises(ProtocolError):
        _send_entity(_client(transport), sink)

    assert sink.messages == []


def test_transport_failure_raises_protocol_error():
    """Test connection errors surface as ProtocolError without a status."""

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NotificationError) as exc_info:
        _send_legacy(_client(handler))

    assert isinstance(exc_info.value, ProtocolError)
    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_api_key_is_not_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="newrelic_deployment_notifier")
    transport = RecordingTransport(201)

    _send_legacy(_client(transport))

    assert "KEY1" not in caplog.text
    assert "***" in caplog.text


def test_non_ascii_secret_raises_protocol_error():
    """Header values that cannot be encoded fail the send instead of escaping as UnicodeEncodeError."""
    transport = RecordingTransport(201)
    client = _client(transport)

    with pytest.raises(ProtocolError) as exc_info:
        client.send_legacy(
            SecretStr("kéy"),
            application_id="42",
            description="",
            revision="",
            changelog="",
            user="",
            european=False,
        )

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.__cause__, (UnicodeEncodeError, ValueError))
    assert "kéy" not in str(exc_info.value)
    assert transport.requests == []


def test_failure_without_detail_is_logged_without_suffix(caplog):
    caplog.set_level(logging.ERROR, logger="newrelic_deployment_notifier")
    transport = RecordingTransport(500, "")

    with pytest.raises(ProtocolError):
        _send_entity(_client(transport), InMemoryDiagnosticsSink())

    assert "Deployment API error for entity MXxBUE18: HTTP 500" in caplog.text
    assert "None" not in caplog.text
