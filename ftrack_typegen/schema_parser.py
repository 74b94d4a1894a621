"""Convert ftrack schema properties to TypeScript fields.

Handles:
- Deprecated (underscore-prefixed) property exclusion
- Properties inherited from a base schema
- $ref and scalar/array type mapping
- required / primary_key -> non-optional fields
- immutable / computed -> readonly fields
"""

from __future__ import annotations

from typing import Any

VALID_TYPES = frozenset({
    "object",
    "array",
    "string",
    "number",
    "boolean",
    "mapped_array",
    "integer",
    "variable",
})

VARIABLE_TYPE = "string | number | boolean | string[]"


class InvalidSchemaError(ValueError):
    """Schema data the generator cannot translate. Aborts generation."""


def verify_valid_type(type_name: str) -> None:
    """Raise InvalidSchemaError unless type_name is a known schema type."""
    if type_name not in VALID_TYPES:
        raise InvalidSchemaError(f"Invalid type {type_name}")


def _array_of(item_type: str) -> str:
    if " " in item_type:
        return f"({item_type})[]"
    return f"{item_type}[]"


def resolve_property_type(key: str, prop: dict[str, Any]) -> str:
    """Map a typed property descriptor to a TypeScript type string."""
    type_name = prop["type"]
    verify_valid_type(type_name)

    if type_name == "integer":
        return "number"
    if type_name == "variable":
        return VARIABLE_TYPE

    if type_name in ("array", "mapped_array"):
        items = prop.get("items")
        if items is None:
            raise InvalidSchemaError(f"No items defined for array {key}")
        if not isinstance(items, dict):
            raise InvalidSchemaError(f"Items of array {key} is not an object")
        if items.get("$ref"):
            return f"{items['$ref']}[]"
        if items.get("type"):
            return _array_of(resolve_property_type(key, items))
        return "any[]"

    return type_name


def filter_properties(
    schema: dict[str, Any],
    inherited: dict[str, Any] | None = None,
    exclude: frozenset[str] = frozenset(),
) -> list[tuple[str, Any]]:
    """Select the properties to emit, sorted by name.

    Drops deprecated properties, anything already declared in ``inherited``
    and any name in ``exclude``.
    """
    inherited = inherited or {}
    properties = schema.get("properties") or {}
    return sorted(
        (key, value)
        for key, value in properties.items()
        if not key.startswith("_") and key not in inherited and key not in exclude
    )


def parse_properties(
    schema: dict[str, Any],
    inherited: dict[str, Any] | None,
    errors: list[str],
    exclude: frozenset[str] = frozenset(),
) -> list[dict[str, Any]]:
    """Build field dicts for a schema's own properties.

    Soft problems are appended to ``errors``; malformed descriptors raise
    InvalidSchemaError.
    """
    schema_id = schema.get("id")
    required = set(schema.get("required") or []) | set(schema.get("primary_key") or [])
    readonly = set(schema.get("immutable") or []) | set(schema.get("computed") or [])
    fields = []

    for key, prop in filter_properties(schema, inherited, exclude):
        if not isinstance(prop, dict):
            raise InvalidSchemaError(
                f"Property {key} in schema {schema_id} is not an object"
            )

        field_type = None
        if prop.get("$ref"):
            field_type = prop["$ref"]
        if prop.get("type"):
            field_type = resolve_property_type(key, prop)

        if field_type is None:
            errors.append(
                f"No type or $ref defined for property {key} in schema {schema_id}"
            )
            continue

        fields.append({
            "name": key,
            "type": field_type,
            "optional": key not in required,
            "readonly": key in readonly,
        })

    return fields
