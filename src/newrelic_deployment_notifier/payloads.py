"""Request bodies for the two deployment APIs and error-body parsing.

The legacy REST API records a deployment against an application::

    POST /v2/applications/{application_id}/deployments.json
    {"deployment": {"revision": ..., "changelog": ..., "description": ..., "user": ...}}

The entity API is the NerdGraph ``changeTrackingCreateDeployment`` mutation,
sent with the deployment input as a GraphQL variable.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

GRAPHQL_PATH = "/graphql"

CREATE_DEPLOYMENT_MUTATION = (
    "mutation CreateDeployment($deployment: ChangeTrackingDeploymentInput!) {\n"
    "  changeTrackingCreateDeployment(deployment: $deployment) {\n"
    "    deploymentId\n"
    "    entityGuid\n"
    "  }\n"
    "}"
)

# Longest raw response body echoed back as a diagnostic.
MAX_DETAIL_LENGTH = 500


def legacy_path(application_id: str) -> str:
    return f"/v2/applications/{quote(application_id, safe='')}/deployments.json"


def legacy_payload(description: str, revision: str, changelog: str, user: str) -> dict[str, Any]:
    """Build the REST body; empty fields are omitted."""
    fields = {
        "revision": revision,
        "changelog": changelog,
        "description": description,
        "user": user,
    }
    return {"deployment": {k: v for k, v in fields.items() if v}}


def entity_payload(
    changelog: str,
    commit: str,
    deeplink: str,
    deployment_type: str,
    description: str,
    entity_guid: str,
    group_id: str,
    timestamp: str,
    user: str,
    version: str,
) -> dict[str, Any]:
    """Build the GraphQL request for a change-tracking deployment.

    ``entityGuid`` and ``version`` are mandatory in the API and always sent;
    other empty fields are omitted. A numeric ``timestamp`` is sent as epoch
    milliseconds.
    """
    deployment: dict[str, Any] = {"entityGuid": entity_guid, "version": version}
    optional: dict[str, Any] = {
        "changelog": changelog,
        "commit": commit,
        "deepLink": deeplink,
        "deploymentType": deployment_type,
        "description": description,
        "groupId": group_id,
        "timestamp": _timestamp(timestamp),
        "user": user,
    }
    deployment.update({k: v for k, v in optional.items() if v not in ("", None)})
    return {"query": CREATE_DEPLOYMENT_MUTATION, "variables": {"deployment": deployment}}


def _timestamp(value: str) -> int | str:
    value = value.strip()
    if value.isdigit():
        return int(value)
    return value


def graphql_errors(body: str) -> str | None:
    """Return the joined ``errors[].message`` of a GraphQL response, if any."""
    data = _load(body)
    if not isinstance(data, dict):
        return None
    errors = data.get("errors")
    if not isinstance(errors, list) or not errors:
        return None
    messages = [str(e["message"]) for e in errors if isinstance(e, dict) and e.get("message")]
    return "; ".join(messages) if messages else json.dumps(errors)[:MAX_DETAIL_LENGTH]


def extract_error_message(body: str) -> str | None:
    """Best-effort diagnostic message from a failed response body."""
    if not body or not body.strip():
        return None
    message = graphql_errors(body)
    if message:
        return message

    data = _load(body)
    if data is None:
        return body.strip()[:MAX_DETAIL_LENGTH]
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            for key in ("title", "message"):
                if error.get(key):
                    return str(error[key])
        elif isinstance(error, str) and error:
            return error
        if data.get("message"):
            return str(data["message"])
    return None


def _load(body: str) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        return None
