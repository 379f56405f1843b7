from __future__ import annotations

from typing import Any, Iterable

from schemabuilder.model.property import FILE_FORMAT, FILE_TYPE, Property, SchemaMetadata
from schemabuilder.schema.errors import SchemaDepthError

DEFAULT_MAX_DEPTH = 64


def generate_schema(
    properties: Iterable[Property],
    metadata: SchemaMetadata | None = None,
    include_metadata: bool = True,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> dict[str, Any]:
    """Build a JSON Schema document from a property tree.

    The root is always ``{"type": "object"}``. Properties with an empty key are
    drafts and are left out, both from ``properties`` and from ``required``.
    When two properties share a key the later one wins. Empty ``properties``
    and ``required`` are omitted rather than emitted as empty containers.
    """
    nodes = list(properties)
    schema: dict[str, Any] = {"type": "object"}

    if include_metadata and metadata is not None:
        if metadata.title:
            schema["title"] = metadata.title
        if metadata.description:
            schema["description"] = metadata.description
        if metadata.version:
            schema["version"] = metadata.version

    props = _build_properties(nodes, depth=1, max_depth=max_depth)
    if props:
        schema["properties"] = props

    required = _required_keys(nodes)
    if required:
        schema["required"] = required
    return schema


def build_fragment(
    prop: Property,
    *,
    depth: int = 1,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> dict[str, Any]:
    """Build the subschema for a single property, ignoring its key."""
    if depth > max_depth:
        raise SchemaDepthError(f"Property nesting exceeds the maximum depth of {max_depth}.")

    fragment: dict[str, Any] = {"type": "string" if prop.type == FILE_TYPE else prop.type}
    if prop.title:
        fragment["title"] = prop.title
    if prop.description:
        fragment["description"] = prop.description
    if prop.type == FILE_TYPE:
        fragment["format"] = FILE_FORMAT

    if prop.type == "string":
        if prop.min_length is not None:
            fragment["minLength"] = prop.min_length
        if prop.max_length is not None:
            fragment["maxLength"] = prop.max_length
        if prop.pattern:
            fragment["pattern"] = prop.pattern
        if prop.enum:
            fragment["enum"] = list(prop.enum)
    elif prop.type in {"number", "integer"}:
        if prop.minimum is not None:
            fragment["minimum"] = prop.minimum
        if prop.maximum is not None:
            fragment["maximum"] = prop.maximum
    elif prop.type == "array":
        if prop.min_items is not None:
            fragment["minItems"] = prop.min_items
        if prop.max_items is not None:
            fragment["maxItems"] = prop.max_items
        if prop.unique_items:
            fragment["uniqueItems"] = True
        if prop.items is not None:
            fragment["items"] = build_fragment(prop.items, depth=depth + 1, max_depth=max_depth)
    elif prop.type == "object" and prop.children:
        fragment["properties"] = _build_properties(
            prop.children, depth=depth + 1, max_depth=max_depth
        )
        required = _required_keys(prop.children)
        if required:
            fragment["required"] = required
    return fragment


def _build_properties(
    nodes: list[Property], *, depth: int, max_depth: int
) -> dict[str, dict[str, Any]]:
    result: dict[str, dict[str, Any]] = {}
    for prop in nodes:
        if not prop.key:
            continue
        # Reassigning an existing key keeps its original slot in the mapping.
        result[prop.key] = build_fragment(prop, depth=depth, max_depth=max_depth)
    return result


def _required_keys(nodes: list[Property]) -> list[str]:
    return [prop.key for prop in nodes if prop.required and prop.key]
