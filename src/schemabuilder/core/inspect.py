from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Iterable, Mapping

from schemabuilder.core import events as ev
from schemabuilder.core.common import (
    DEPTH_HINT,
    config_stage,
    elapsed_ms,
    fetch_document_stage,
)
from schemabuilder.model.ids import IdAllocator
from schemabuilder.model.keys import type_label
from schemabuilder.model.property import Property
from schemabuilder.schema.errors import SchemaBuilderError
from schemabuilder.schema.parser import parse_schema

_CONSTRAINT_FIELDS = (
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("pattern", "pattern"),
    ("enum", "enum"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("min_items", "minItems"),
    ("max_items", "maxItems"),
    ("unique_items", "uniqueItems"),
)


def inspect_events(
    *,
    source: str,
    project_dir: Path = Path("."),
    config_path: Path | None = None,
) -> Iterable[ev.BuilderEvent]:
    project_dir = project_dir.resolve()
    yield ev.CommandStarted(
        command="inspect",
        project_dir=project_dir,
        config_path=config_path,
        options={"source": source},
    )

    result = config_stage("inspect", project_dir, config_path)
    yield from result.events
    if result.failed:
        yield ev.CommandCompleted(command="inspect", ok=False, exit_code=2)
        return
    config = result.value

    result = fetch_document_stage("inspect", source, project_dir)
    yield from result.events
    if result.failed:
        yield ev.CommandCompleted(command="inspect", ok=False, exit_code=2)
        return

    yield ev.StageStarted(command="inspect", stage_id="parse", label="Parse schema")
    started = time.perf_counter()
    try:
        parsed = parse_schema(
            result.value,
            allocator=IdAllocator(config.id_prefix),
            max_depth=config.max_depth,
        )
    except SchemaBuilderError as exc:
        yield ev.StageFailed(
            command="inspect",
            stage_id="parse",
            duration_ms=elapsed_ms(started),
            error_code="depth_error",
            message=str(exc),
            hint=DEPTH_HINT,
        )
        yield ev.CommandCompleted(command="inspect", ok=False, exit_code=2)
        return
    yield ev.StageCompleted(
        command="inspect",
        stage_id="parse",
        duration_ms=elapsed_ms(started),
        status="success",
    )

    title = parsed.metadata.title if parsed.metadata else None
    yield ev.TreeRendered(
        command="inspect",
        title=title or None,
        rows=tree_rows(parsed.properties, config.type_labels),
    )
    yield ev.CommandCompleted(command="inspect", ok=True, exit_code=0)


def tree_rows(
    properties: Iterable[Property],
    labels: Mapping[str, str] | None = None,
    depth: int = 0,
) -> list[dict[str, Any]]:
    """Flatten a property tree into display rows, items nodes marked ``role=items``."""
    rows: list[dict[str, Any]] = []
    for prop in properties:
        rows.extend(_node_rows(prop, labels, depth, role="property"))
    return rows


def _node_rows(
    prop: Property, labels: Mapping[str, str] | None, depth: int, *, role: str
) -> list[dict[str, Any]]:
    rows = [_row(prop, labels, depth, role=role)]
    rows.extend(tree_rows(prop.children, labels, depth + 1))
    if prop.items is not None:
        rows.extend(_node_rows(prop.items, labels, depth + 1, role="items"))
    return rows


def _row(prop: Property, labels: Mapping[str, str] | None, depth: int, *, role: str) -> dict[str, Any]:
    label = type_label(prop.type, labels)
    if prop.type == "array" and prop.items is not None:
        label = f"{label} of {type_label(prop.items.type, labels)}"
    constraints = {
        alias: getattr(prop, name)
        for name, alias in _CONSTRAINT_FIELDS
        if getattr(prop, name) is not None
    }
    return {
        "depth": depth,
        "key": prop.key,
        "title": prop.title or prop.key,
        "type": prop.type,
        "label": label,
        "required": prop.required,
        "role": role,
        "constraints": constraints,
    }
