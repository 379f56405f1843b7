from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from schemabuilder.model.ids import IdAllocator, default_allocator
from schemabuilder.model.property import FILE_FORMAT, FILE_TYPE, Property, SchemaMetadata
from schemabuilder.schema.errors import SchemaDepthError
from schemabuilder.schema.generator import DEFAULT_MAX_DEPTH

DEFAULT_VERSION = "1.0.0"
ITEM_KEY = "item"

_INTEGER_CONSTRAINTS = {
    "minLength": "min_length",
    "maxLength": "max_length",
    "minItems": "min_items",
    "maxItems": "max_items",
}
_NUMBER_CONSTRAINTS = {
    "minimum": "minimum",
    "maximum": "maximum",
}


@dataclass
class ParsedSchema:
    properties: list[Property] = field(default_factory=list)
    metadata: SchemaMetadata | None = None


def parse_schema(
    document: Any,
    *,
    allocator: IdAllocator | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ParsedSchema:
    """Read a JSON Schema document back into a property tree.

    Parsing is permissive: missing or oddly typed optional fields are skipped,
    boolean subschemas and tuple-form ``items`` are dropped, and constraint
    fields are copied whatever the declared type is. Decoding the raw text is
    the caller's job; a non-object document simply yields an empty result.
    """
    allocator = allocator or default_allocator()
    result = ParsedSchema()
    if not isinstance(document, dict):
        return result

    result.metadata = _parse_metadata(document)

    properties = document.get("properties")
    if isinstance(properties, dict):
        result.properties = parse_properties(
            properties,
            _required_list(document),
            allocator=allocator,
            depth=1,
            max_depth=max_depth,
        )
    return result


def parse_properties(
    properties: dict[str, Any],
    required: list[Any] | None = None,
    *,
    allocator: IdAllocator | None = None,
    depth: int = 1,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Property]:
    if depth > max_depth:
        raise SchemaDepthError(f"Schema nesting exceeds the maximum depth of {max_depth}.")
    allocator = allocator or default_allocator()
    required = required or []

    nodes: list[Property] = []
    for key, subschema in properties.items():
        if not isinstance(subschema, dict):
            continue
        nodes.append(
            _parse_property(
                str(key),
                subschema,
                required=str(key) in required,
                allocator=allocator,
                depth=depth,
                max_depth=max_depth,
            )
        )
    return nodes


def _parse_property(
    key: str,
    subschema: dict[str, Any],
    *,
    required: bool,
    allocator: IdAllocator,
    depth: int,
    max_depth: int,
) -> Property:
    raw_type = subschema.get("type")
    prop_type = raw_type if isinstance(raw_type, str) else "string"
    if prop_type == "string" and subschema.get("format") == FILE_FORMAT:
        prop_type = FILE_TYPE

    values: dict[str, Any] = {
        "id": allocator.next(),
        "key": key,
        "type": prop_type,
        "required": required,
    }
    for name in ("title", "description"):
        if isinstance(subschema.get(name), str):
            values[name] = subschema[name]

    for source, target in _INTEGER_CONSTRAINTS.items():
        if _is_integer(subschema.get(source)):
            values[target] = subschema[source]
    for source, target in _NUMBER_CONSTRAINTS.items():
        if _is_number(subschema.get(source)):
            values[target] = subschema[source]
    pattern = subschema.get("pattern")
    if isinstance(pattern, str) and pattern:
        values["pattern"] = pattern
    enum = subschema.get("enum")
    if isinstance(enum, list) and all(isinstance(item, str) for item in enum):
        values["enum"] = list(enum)
    if subschema.get("uniqueItems"):
        values["unique_items"] = True

    items = subschema.get("items")
    if prop_type == "array" and isinstance(items, dict):
        parsed_items = parse_properties(
            {ITEM_KEY: items},
            allocator=allocator,
            depth=depth + 1,
            max_depth=max_depth,
        )
        values["items"] = parsed_items[0]

    children = subschema.get("properties")
    if isinstance(children, dict):
        values["children"] = parse_properties(
            children,
            _required_list(subschema),
            allocator=allocator,
            depth=depth + 1,
            max_depth=max_depth,
        )

    return Property.model_validate(values)


def _parse_metadata(document: dict[str, Any]) -> SchemaMetadata | None:
    title = document.get("title")
    description = document.get("description")
    version = document.get("version")
    if not any(isinstance(value, str) for value in (title, description, version)):
        return None
    return SchemaMetadata(
        title=title if isinstance(title, str) else "",
        description=description if isinstance(description, str) else "",
        version=version if isinstance(version, str) else DEFAULT_VERSION,
    )


def _required_list(schema: dict[str, Any]) -> list[Any]:
    required = schema.get("required")
    return required if isinstance(required, list) else []


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
