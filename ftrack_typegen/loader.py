"""Load ftrack schemas and custom attribute configurations.

Either fetches them from a running ftrack server in a single batched API
call, or reads previously dumped JSON files from disk.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import httpx

# Environment variables used by the ftrack API clients
FTRACK_SERVER = os.environ.get("FTRACK_SERVER", "")
FTRACK_API_USER = os.environ.get("FTRACK_API_USER", "")
FTRACK_API_KEY = os.environ.get("FTRACK_API_KEY", "")

_CUSTOM_ATTRIBUTE_QUERY = (
    "select key, is_hierarchical, object_type.name"
    " from CustomAttributeConfiguration"
)


class ServerError(RuntimeError):
    """Raised when the ftrack API answers with an exception payload."""


def load_schemas(path: Path) -> list[dict[str, Any]]:
    """Load a schema list previously dumped from query_schemas."""
    with open(path) as f:
        return json.load(f)


def load_custom_attributes(path: Path | None) -> list[dict[str, Any]]:
    """Load custom attribute configurations, or none when no file is given."""
    if path is None:
        return []
    with open(path) as f:
        data = json.load(f)
    # Accept a raw query response as well as a bare list
    if isinstance(data, dict):
        return data.get("data", [])
    return data


def fetch_server_data(
    server_url: str = FTRACK_SERVER,
    api_user: str = FTRACK_API_USER,
    api_key: str = FTRACK_API_KEY,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """Fetch server version, schemas and custom attributes from ftrack.

    Returns a dict with keys ``server_version``, ``server_url``,
    ``schemas`` and ``custom_attributes``.
    """
    if not server_url:
        raise ServerError("FTRACK_SERVER is not set")

    payload = [
        {"action": "query_server_information"},
        {"action": "query_schemas"},
        {"action": "query", "expression": _CUSTOM_ATTRIBUTE_QUERY},
    ]
    headers = {
        "ftrack-user": api_user,
        "ftrack-api-key": api_key,
        "Accept": "application/json",
    }
    url = f"{server_url.rstrip('/')}/api"

    if client is None:
        with httpx.Client(timeout=60.0) as own_client:
            resp = own_client.post(url, json=payload, headers=headers)
    else:
        resp = client.post(url, json=payload, headers=headers)
    resp.raise_for_status()
    body = resp.json()

    # Errors come back as a single object instead of a result list
    if isinstance(body, dict) and "exception" in body:
        raise ServerError(f"{body['exception']}: {body.get('content', '')}")

    server_info, schemas, custom_attributes = body
    return {
        "server_version": server_info.get("version", "unknown"),
        "server_url": server_url,
        "schemas": schemas,
        "custom_attributes": custom_attributes.get("data", []),
    }


def get_schema(schemas: list[dict[str, Any]], schema_id: str) -> dict[str, Any] | None:
    """Find a schema by id."""
    for schema in schemas:
        if schema.get("id") == schema_id:
            return schema
    return None


def get_base_schema(
    schema: dict[str, Any], schemas: list[dict[str, Any]]
) -> dict[str, Any] | None:
    """Resolve the schema's $mixin reference against all schemas."""
    mixin = schema.get("$mixin")
    if not isinstance(mixin, dict) or not mixin.get("$ref"):
        return None
    return get_schema(schemas, mixin["$ref"])
