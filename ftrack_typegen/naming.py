"""Resolve TypeScript declaration names for ftrack schemas.

Names follow the schema id, with two special cases:
  - TypedContext becomes a generic over its subtype names
  - schemas aliased to Task are subtypes of TypedContext

Examples:
  {"id": "Project"}                        -> Project
  {"id": "TypedContext"}                   -> TypedContext<K extends TypedContextSubtype = TypedContextSubtype>
  {"id": "Shot", "alias_for": {"id": "Task"}} -> Shot (a TypedContext subtype)
"""

from __future__ import annotations

import json
from typing import Any

TYPED_CONTEXT_ID = "TypedContext"
TYPED_CONTEXT_ALIAS_ID = "Task"
TYPED_CONTEXT_GENERIC = "TypedContext<K extends TypedContextSubtype = TypedContextSubtype>"

# Added to every declaration, so stripped from anything it extends
OMITTED_META_PROPERTIES = ("__entity_type__", "__permissions")


def get_interface_name(schema: dict[str, Any]) -> str | None:
    """Return the declared name for a schema, or None if it has no id."""
    schema_id = schema.get("id")
    if not schema_id:
        return None
    if schema_id == TYPED_CONTEXT_ID:
        return TYPED_CONTEXT_GENERIC
    return schema_id


def is_typed_context_subtype(schema: dict[str, Any]) -> bool:
    """Check if the schema is declared as an alias for Task."""
    alias_for = schema.get("alias_for")
    return isinstance(alias_for, dict) and alias_for.get("id") == TYPED_CONTEXT_ALIAS_ID


def entity_type_field_type(schema_id: str) -> str:
    """Type of the __entity_type__ discriminator for a schema."""
    if schema_id == TYPED_CONTEXT_ID:
        return "K"
    return ts_literal(schema_id)


def omit_clause(type_name: str, extra: tuple[str, ...] = ()) -> str:
    """Build Omit<type_name, ...> over the meta properties plus any extras."""
    keys = " | ".join(ts_literal(key) for key in OMITTED_META_PROPERTIES + extra)
    return f"Omit<{type_name}, {keys}>"


def ts_literal(value: str) -> str:
    """Quote a value as a TypeScript string literal."""
    return json.dumps(value)
