"""Render templates and write generated output.

Takes the context from context_builder and produces the TypeScript
schema document.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import jinja2

from .context_builder import EmitResult, build_context
from .naming import ts_literal

TEMPLATE_DIR = Path(__file__).parent / "templates"
OUTPUT_PATH = Path("generated") / "schema.ts"

NO_SCHEMAS_ERROR = "No schemas found!"


def ts_union(values: list[str]) -> str:
    """Render a union of string literals, or never when empty."""
    if not values:
        return "never"
    return " | ".join(ts_literal(value) for value in values)


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["ts_union"] = ts_union
    return env


def render(context: dict[str, Any]) -> str:
    """Render the schema template with a context from build_context."""
    template = _environment().get_template("schema.ts.j2")
    return template.render(**context)


def emit_to_string(
    schemas: list[dict[str, Any]],
    custom_attributes: list[dict[str, Any]] | None = None,
    server_version: str = "unknown",
    server_url: str = "",
    generated_at: datetime | None = None,
) -> EmitResult:
    """Generate the TypeScript document for a schema list.

    Soft errors are collected on the result. Invalid schema data raises
    InvalidSchemaError and nothing is produced.
    """
    if not schemas:
        return EmitResult(errors=[NO_SCHEMAS_ERROR])

    timestamp = (generated_at or datetime.now(timezone.utc)).isoformat()
    context, errors = build_context(
        schemas,
        custom_attributes,
        server_version=server_version,
        server_url=server_url,
        generated_at=timestamp,
    )
    return EmitResult(
        content=render(context),
        errors=errors,
        declaration_count=context["declaration_count"],
    )


def write_output(content: str, output_path: Path = OUTPUT_PATH) -> Path:
    """Write the generated document, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content)
    return output_path
