"""Shared fixtures for the ftrack typegen tests.

Schemas are built inline, in the shape ftrack's query_schemas returns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest


@pytest.fixture
def typed_context_schema() -> dict[str, Any]:
    """TypedContext with the properties subtypes inherit."""
    return {
        "id": "TypedContext",
        "properties": {
            "id": {"type": "string"},
            "name": {"type": "string"},
            "custom_attributes": {
                "type": "array",
                "items": {"$ref": "CustomAttributeValue"},
            },
        },
        "required": ["name"],
        "primary_key": ["id"],
    }


@pytest.fixture
def custom_attributes() -> list[dict[str, Any]]:
    """Custom attribute configurations as returned by the query."""
    return [
        {"key": "fstart", "is_hierarchical": True, "object_type": None},
        {"key": "fend", "is_hierarchical": True, "object_type": None},
        {"key": "shot_code", "is_hierarchical": False, "object_type": {"name": "Shot"}},
        {"key": "asset_kind", "is_hierarchical": False, "object_type": {"name": "AssetBuild"}},
    ]


@pytest.fixture
def generated_at() -> datetime:
    return datetime(2023, 2, 1, tzinfo=timezone.utc)
