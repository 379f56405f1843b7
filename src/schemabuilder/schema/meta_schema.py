from __future__ import annotations

from typing import Any

TREE_FILE_META_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://schemabuilder.dev/schema/tree/v1",
    "title": "schemabuilder property tree file (v1)",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "version": {"type": "string"},
        "properties": {
            "type": "array",
            "items": {"$ref": "#/$defs/property"},
        },
    },
    "$defs": {
        "property": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "id": {"type": "string", "minLength": 1},
                "key": {"type": "string"},
                "title": {"type": "string"},
                "type": {"type": "string", "minLength": 1},
                "description": {"type": "string"},
                "required": {"type": "boolean"},
                "minLength": {"type": "integer"},
                "maxLength": {"type": "integer"},
                "pattern": {"type": "string"},
                "enum": {"type": "array", "items": {"type": "string"}},
                "minimum": {"type": "number"},
                "maximum": {"type": "number"},
                "minItems": {"type": "integer"},
                "maxItems": {"type": "integer"},
                "uniqueItems": {"type": "boolean"},
                "children": {
                    "type": "array",
                    "items": {"$ref": "#/$defs/property"},
                },
                "items": {"$ref": "#/$defs/property"},
            },
        },
    },
}
