"""JSON Schema (draft 2020-12) for JUN documents, generated per dialect.

The schema mirrors the dialect tables: one entry per wire key found in any
payload or in the common property set. Legacy aliases are listed and marked
``deprecated``. Every level stays open (``additionalProperties: true``)
because unknown keys are ignored by the decoder rather than rejected.
"""

from __future__ import annotations

from typing import Any

from jun.codec.dialects import Dialect, get_dialect
from jun.codec.fields import FieldKind
from jun.schema import SCHEMA_VERSION

_JSON_TYPES = {
    FieldKind.STRING: "string",
    FieldKind.NUMBER: "number",
    FieldKind.BOOLEAN: "boolean",
}


def get_schema(dialect: str | Dialect | None = None) -> dict[str, Any]:
    """Return the JSON Schema describing documents of *dialect*."""
    resolved = get_dialect(dialect)
    unknown_types = (
        "Unknown types are rejected."
        if resolved.strict
        else "Unknown types decode to a text node naming the type."
    )

    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "$id": f"https://jun.dev/schema/{resolved.name}.json",
        "title": f"JUN component ({resolved.name})",
        "description": resolved.description,
        "type": "object",
        "required": ["type"],
        "additionalProperties": True,
        "properties": {
            "id": {
                "type": "string",
                "format": "uuid",
                "description": "Optional stable identifier; generated when absent.",
            },
            "type": {
                "type": "string",
                "description": f"Component type, matched case-insensitively. {unknown_types}",
                "examples": resolved.type_names,
            },
            "properties": {
                "type": "object",
                "additionalProperties": True,
                "properties": _property_schemas(resolved),
            },
            "children": {
                "type": "array",
                "items": {"$ref": "#"},
            },
        },
        "x-jun-dialect": {
            "name": resolved.name,
            "version": resolved.version,
            "strict": resolved.strict,
            "schema_version": SCHEMA_VERSION,
        },
    }


def _property_schemas(dialect: Dialect) -> dict[str, dict[str, Any]]:
    out: dict[str, dict[str, Any]] = {}
    users: dict[str, list[str]] = {}

    for schema in dialect.schemas:
        for spec in schema.fields:
            entry = out.setdefault(spec.key, {"type": _JSON_TYPES[spec.kind]})
            if spec.default is not None:
                entry["default"] = spec.default
            users.setdefault(spec.key, []).append(schema.variant.value)
            for alias in spec.aliases:
                out.setdefault(
                    alias,
                    {
                        "type": _JSON_TYPES[spec.kind],
                        "deprecated": True,
                        "description": f"Legacy alias of '{spec.key}'.",
                    },
                )

    for key, variants in users.items():
        out[key]["description"] = "Used by: " + ", ".join(variants) + "."

    for spec in dialect.common_fields:
        out[spec.key] = {
            "type": _JSON_TYPES[spec.kind],
            "description": "Common property, applies to every component.",
        }

    return out
