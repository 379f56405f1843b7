from __future__ import annotations

import copy
import io
import json
from pathlib import Path
from typing import Any, Iterable

from jsonschema import Draft202012Validator
from pydantic import ValidationError
from ruamel.yaml import YAML

from schemabuilder.model.ids import IdAllocator, default_allocator
from schemabuilder.model.property import Property, SchemaMetadata
from schemabuilder.model.tree import walk
from schemabuilder.schema.errors import SchemaLoadError, TreeFileError
from schemabuilder.schema.meta_schema import TREE_FILE_META_SCHEMA

_yaml = YAML(typ="safe")

_METADATA_KEYS = ("title", "description", "version")


def load_schema_document(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise SchemaLoadError(f"Schema not found: {path}")
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON schema: {path}") from exc
    if not isinstance(parsed, dict):
        raise SchemaLoadError("Schema must be a JSON object.")
    return parsed


def dump_schema_text(document: dict[str, Any], *, indent: int = 2) -> str:
    # Key order is part of the output contract, so no sort_keys here.
    payload = json.dumps(document, indent=indent, ensure_ascii=False)
    return f"{payload}\n"


def load_tree_file(
    path: Path,
    *,
    allocator: IdAllocator | None = None,
) -> tuple[list[Property], SchemaMetadata | None]:
    if not path.exists():
        raise TreeFileError(f"Tree file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TreeFileError(f"Invalid JSON tree file: {path}") from exc
    else:
        try:
            document = _yaml.load(text)
        except Exception as exc:  # noqa: BLE001
            raise TreeFileError(f"Failed to parse tree file YAML: {path}") from exc
    return load_tree_mapping(document, allocator=allocator)


def load_tree_mapping(
    document: Any,
    *,
    allocator: IdAllocator | None = None,
) -> tuple[list[Property], SchemaMetadata | None]:
    """Validate a tree document and build the property tree from it.

    Nodes without an ``id`` get a fresh one from ``allocator``; ids given in the
    document must be unique across the whole tree.
    """
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise TreeFileError("Tree file must be a mapping at the top level.")
    validate_tree_document(document)

    allocator = allocator or default_allocator()
    raw_nodes = copy.deepcopy(document.get("properties") or [])
    for raw in raw_nodes:
        _assign_ids(raw, allocator)
    try:
        properties = [Property.model_validate(raw) for raw in raw_nodes]
    except ValidationError as exc:
        raise TreeFileError(str(exc)) from exc

    seen: set[str] = set()
    for node, _depth in walk(properties):
        if node.id in seen:
            raise TreeFileError(f"Duplicate property id: {node.id}")
        seen.add(node.id)

    metadata = None
    if any(key in document for key in _METADATA_KEYS):
        metadata = SchemaMetadata(**{key: document.get(key, "") for key in _METADATA_KEYS})
    return properties, metadata


def validate_tree_document(document: dict[str, Any]) -> None:
    validator = Draft202012Validator(TREE_FILE_META_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda err: list(err.absolute_path))
    if not errors:
        return
    first = errors[0]
    path = _format_error_path(first.absolute_path)
    raise TreeFileError(f"Tree file validation failed at {path}: {first.message}")


def tree_to_mapping(
    properties: Iterable[Property],
    metadata: SchemaMetadata | None = None,
) -> dict[str, Any]:
    document: dict[str, Any] = {}
    if metadata is not None:
        for key in _METADATA_KEYS:
            value = getattr(metadata, key)
            if value:
                document[key] = value
    document["properties"] = [_node_to_mapping(node) for node in properties]
    return document


def dump_tree_text(
    properties: Iterable[Property],
    metadata: SchemaMetadata | None = None,
) -> str:
    dumper = YAML()
    dumper.default_flow_style = False
    stream = io.StringIO()
    dumper.dump(tree_to_mapping(properties, metadata), stream)
    return stream.getvalue()


def _node_to_mapping(node: Property) -> dict[str, Any]:
    data = node.model_dump(
        by_alias=True,
        exclude_none=True,
        exclude={"id", "children", "items"},
    )
    if node.children:
        data["children"] = [_node_to_mapping(child) for child in node.children]
    if node.items is not None:
        data["items"] = _node_to_mapping(node.items)
    return data


def _assign_ids(raw: Any, allocator: IdAllocator) -> None:
    if not isinstance(raw, dict):
        return
    raw.setdefault("id", allocator.next())
    for child in raw.get("children") or []:
        _assign_ids(child, allocator)
    if raw.get("items") is not None:
        _assign_ids(raw["items"], allocator)


def _format_error_path(path_parts: Any) -> str:
    parts = [str(part) for part in path_parts]
    if not parts:
        return "root"
    return "root." + ".".join(parts)
