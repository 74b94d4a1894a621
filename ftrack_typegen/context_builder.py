"""Build Jinja2 template context from ftrack schemas.

Resolves each schema's inheritance, narrows custom attributes for
TypedContext subtypes, and assembles the full context dict for
schema.ts.j2.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .loader import get_base_schema, get_schema
from .naming import (
    TYPED_CONTEXT_ID,
    entity_type_field_type,
    get_interface_name,
    is_typed_context_subtype,
    omit_clause,
    ts_literal,
)
from .schema_parser import parse_properties

CUSTOM_ATTRIBUTES_FIELD = "custom_attributes"


@dataclass(frozen=True)
class ExtendsBase:
    """Extension of the schema named by a $mixin reference."""

    ref: str

    def to_typescript(self) -> str:
        return omit_clause(self.ref)


@dataclass(frozen=True)
class ExtendsGeneric:
    """Specialization of a generic declaration for one of its subtypes."""

    ref: str
    type_argument: str

    def to_typescript(self) -> str:
        return omit_clause(
            f"{self.ref}<{ts_literal(self.type_argument)}>", (CUSTOM_ATTRIBUTES_FIELD,)
        )


Extends = Union[ExtendsBase, ExtendsGeneric]


@dataclass
class EmitResult:
    """Output of a generation pass plus the soft errors collected on the way."""

    content: str = ""
    errors: list[str] = field(default_factory=list)
    declaration_count: int = 0


def resolve_extends(
    schema: dict[str, Any], base_schema: dict[str, Any] | None
) -> list[Extends]:
    """Resolve what a schema extends, base before generic.

    Both targets at once is not expected in ftrack data but is kept
    rather than rejected.
    """
    targets: list[Extends] = []
    if base_schema and base_schema.get("id"):
        targets.append(ExtendsBase(base_schema["id"]))
    if is_typed_context_subtype(schema):
        targets.append(ExtendsGeneric(TYPED_CONTEXT_ID, schema["id"]))
    return targets


def applicable_custom_attribute_keys(
    schema_id: str, custom_attributes: list[dict[str, Any]]
) -> list[str]:
    """Keys of the custom attributes that apply to an entity type.

    Hierarchical attributes apply to every entity type, the rest only to
    their own object type. Input order is kept and duplicate keys dropped.
    """
    keys: list[str] = []
    for config in custom_attributes:
        object_type = config.get("object_type") or {}
        if config.get("is_hierarchical") or object_type.get("name") == schema_id:
            key = config.get("key")
            if key and key not in keys:
                keys.append(key)
    return keys


def _custom_attributes_type(keys: list[str]) -> str:
    if not keys:
        return "Array<never>"
    values = " | ".join(f"TypedCustomAttributeValue<{ts_literal(key)}>" for key in keys)
    return f"Array<{values}>"


def _synthetic_fields(schema_id: str) -> list[dict[str, Any]]:
    """Entity type and permissions are missing from the source schema."""
    return [
        {
            "name": "__entity_type__",
            "type": entity_type_field_type(schema_id),
            "optional": True,
            "readonly": False,
        },
        {
            "name": "__permissions",
            "type": "Record<string, any>",
            "optional": True,
            "readonly": False,
        },
    ]


def build_declaration(
    schema: dict[str, Any],
    schemas: list[dict[str, Any]],
    custom_attributes: list[dict[str, Any]],
    errors: list[str],
) -> dict[str, Any]:
    """Build the declaration dict for one schema that has an id."""
    schema_id = schema["id"]
    base_schema = get_base_schema(schema, schemas)
    extends = resolve_extends(schema, base_schema)
    fields: list[dict[str, Any]] = []

    if is_typed_context_subtype(schema):
        # Subtypes only add what TypedContext does not already declare
        typed_context = get_schema(schemas, TYPED_CONTEXT_ID) or {}
        keys = applicable_custom_attribute_keys(schema_id, custom_attributes)
        fields.append({
            "name": CUSTOM_ATTRIBUTES_FIELD,
            "type": _custom_attributes_type(keys),
            "optional": False,
            "readonly": False,
        })
        fields.extend(parse_properties(
            schema,
            typed_context.get("properties"),
            errors,
            exclude=frozenset({CUSTOM_ATTRIBUTES_FIELD}),
        ))
    else:
        inherited = base_schema.get("properties") if base_schema else None
        fields.extend(parse_properties(schema, inherited, errors))

    fields.extend(_synthetic_fields(schema_id))

    return {
        "name": get_interface_name(schema),
        "entity_type": schema_id,
        "extends": [target.to_typescript() for target in extends],
        "fields": fields,
        "is_typed_context_subtype": is_typed_context_subtype(schema),
    }


def build_context(
    schemas: list[dict[str, Any]],
    custom_attributes: list[dict[str, Any]] | None = None,
    server_version: str = "unknown",
    server_url: str = "",
    generated_at: str = "",
) -> tuple[dict[str, Any], list[str]]:
    """Build the full template context and the list of soft errors."""
    custom_attributes = custom_attributes or []
    errors: list[str] = []
    declarations: list[dict[str, Any]] = []

    for index, schema in enumerate(schemas):
        if not get_interface_name(schema):
            errors.append(f"No ID defined for schema at index {index}")
            continue
        declarations.append(
            build_declaration(schema, schemas, custom_attributes, errors)
        )

    subtypes = [d["entity_type"] for d in declarations if d["is_typed_context_subtype"]]

    custom_attribute_keys: list[str] = []
    for config in custom_attributes:
        key = config.get("key")
        if key and key not in custom_attribute_keys:
            custom_attribute_keys.append(key)

    context = {
        "declarations": declarations,
        "entity_types": [d["entity_type"] for d in declarations],
        "typed_context_subtypes": subtypes,
        "custom_attribute_keys": custom_attribute_keys,
        "declaration_count": len(declarations),
        "server_version": server_version,
        "server_url": server_url,
        "generated_at": generated_at,
    }
    return context, errors
