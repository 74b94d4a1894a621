"""Entry point: python -m ftrack_typegen

Fetches schemas from $FTRACK_SERVER (or reads them from --schemas),
generates generated/schema.ts.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import httpx

from .codegen import OUTPUT_PATH, emit_to_string, write_output
from .loader import (
    FTRACK_SERVER,
    ServerError,
    fetch_server_data,
    load_custom_attributes,
    load_schemas,
)
from .schema_parser import InvalidSchemaError


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ftrack_typegen",
        description="Generate TypeScript interfaces from ftrack schemas.",
    )
    parser.add_argument("--schemas", type=Path, help="Read schemas from a JSON file instead of the server")
    parser.add_argument("--custom-attributes", type=Path, help="JSON file of custom attribute configurations")
    parser.add_argument("--server-version", default="unknown", help="Version recorded in the header for --schemas")
    parser.add_argument("--output", type=Path, default=OUTPUT_PATH, help=f"Output file (default: {OUTPUT_PATH})")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        if args.schemas:
            data = {
                "schemas": load_schemas(args.schemas),
                "custom_attributes": load_custom_attributes(args.custom_attributes),
                "server_version": args.server_version,
                "server_url": FTRACK_SERVER,
            }
        else:
            data = fetch_server_data()
        result = emit_to_string(**data)
    except (ServerError, httpx.HTTPError, InvalidSchemaError) as exc:
        print(f"Generation failed: {exc}", file=sys.stderr)
        return 1

    for error in result.errors:
        print(error, file=sys.stderr)
    if not result.content:
        return 1

    output_path = write_output(result.content, args.output)
    print(f"Generated {output_path} ({result.declaration_count} declarations)")
    return 1 if result.errors else 0


if __name__ == "__main__":
    sys.exit(main())
