from __future__ import annotations

import re
from typing import Mapping

from schemabuilder.model.property import Property

DEFAULT_TYPE_LABELS: dict[str, str] = {
    "string": "String",
    "number": "Number",
    "integer": "Integer",
    "boolean": "Boolean",
    "object": "Object",
    "array": "Array",
    "null": "Null",
    "file": "File",
}

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def to_snake_case(text: str) -> str:
    """``"First Name!"`` -> ``"first_name"``."""
    cleaned = _NON_WORD.sub("", text.strip().lower())
    return _WHITESPACE.sub("_", cleaned)


def derive_key(node: Property, *, force: bool = False) -> Property:
    """Fill the key from the title unless the key was already set by hand."""
    if not node.title:
        return node
    if node.key and not force:
        return node
    return node.model_copy(update={"key": to_snake_case(node.title)})


def type_label(type_name: str, overrides: Mapping[str, str] | None = None) -> str:
    labels = {**DEFAULT_TYPE_LABELS, **(overrides or {})}
    return labels.get(type_name) or type_name
