from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from schemabuilder.model.property import FILE_FORMAT

_UNMODELED_KEYWORDS = (
    "$ref",
    "oneOf",
    "anyOf",
    "allOf",
    "not",
    "if",
    "then",
    "else",
    "$defs",
    "definitions",
)


@dataclass(frozen=True)
class DroppedConstruct:
    path: str
    code: str
    message: str


def find_dropped_constructs(document: Any) -> list[DroppedConstruct]:
    """List what ``parse_schema`` will silently discard from ``document``.

    Paths use JSON pointer syntax relative to the document root.
    """
    dropped: list[DroppedConstruct] = []
    if not isinstance(document, dict):
        dropped.append(
            DroppedConstruct(path="", code="not_an_object", message="Document is not a JSON object.")
        )
        return dropped
    if "$schema" in document:
        dropped.append(
            DroppedConstruct(
                path="/$schema",
                code="dialect_ignored",
                message="$schema is ignored and not written back.",
            )
        )
    _check_keywords(document, "", dropped)
    _check_properties(document, "", dropped)
    return dropped


def _check_properties(schema: dict[str, Any], path: str, dropped: list[DroppedConstruct]) -> None:
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return
    for key, subschema in properties.items():
        _check_subschema(subschema, f"{path}/properties/{_escape(str(key))}", dropped)


def _check_subschema(subschema: Any, path: str, dropped: list[DroppedConstruct]) -> None:
    if isinstance(subschema, bool):
        dropped.append(
            DroppedConstruct(path=path, code="boolean_schema", message="Boolean schemas are not supported.")
        )
        return
    if not isinstance(subschema, dict):
        dropped.append(
            DroppedConstruct(path=path, code="invalid_schema", message="Subschema is not a JSON object.")
        )
        return

    raw_type = subschema.get("type")
    if "type" in subschema and not isinstance(raw_type, str):
        dropped.append(
            DroppedConstruct(
                path=f"{path}/type",
                code="type_not_string",
                message=f"Type {raw_type!r} is not a single type name; falls back to string.",
            )
        )
    fmt = subschema.get("format")
    if fmt is not None and fmt != FILE_FORMAT:
        dropped.append(
            DroppedConstruct(
                path=f"{path}/format",
                code="format_ignored",
                message=f"Format {fmt!r} is not modeled.",
            )
        )
    enum = subschema.get("enum")
    if isinstance(enum, list) and not all(isinstance(item, str) for item in enum):
        dropped.append(
            DroppedConstruct(
                path=f"{path}/enum",
                code="enum_not_strings",
                message="Only enums of strings are modeled; this enum is dropped.",
            )
        )
    _check_keywords(subschema, path, dropped)

    items = subschema.get("items")
    if isinstance(items, list):
        dropped.append(
            DroppedConstruct(
                path=f"{path}/items",
                code="tuple_items",
                message="Tuple-form items are not supported.",
            )
        )
    elif items is not None and raw_type == "array":
        _check_subschema(items, f"{path}/items", dropped)

    _check_properties(subschema, path, dropped)


def _check_keywords(schema: dict[str, Any], path: str, dropped: list[DroppedConstruct]) -> None:
    for keyword in _UNMODELED_KEYWORDS:
        if keyword in schema:
            dropped.append(
                DroppedConstruct(
                    path=f"{path}/{keyword}",
                    code="unsupported_keyword",
                    message=f"{keyword} is not modeled and is dropped.",
                )
            )


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")
