from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from schemabuilder.core import events as ev
from schemabuilder.core.common import (
    DEPTH_HINT,
    config_stage,
    count_nodes,
    elapsed_ms,
    resolve_path,
    write_output_events,
)
from schemabuilder.model.ids import IdAllocator
from schemabuilder.schema.documents import dump_schema_text, load_tree_file
from schemabuilder.schema.errors import SchemaBuilderError
from schemabuilder.schema.generator import generate_schema


def generate_events(
    *,
    tree_path: Path,
    project_dir: Path = Path("."),
    config_path: Path | None = None,
    output_path: Path | None = None,
    include_metadata: bool | None = None,
) -> Iterable[ev.BuilderEvent]:
    project_dir = project_dir.resolve()
    tree_path = resolve_path(project_dir, tree_path)
    if output_path is not None:
        output_path = resolve_path(project_dir, output_path)

    yield ev.CommandStarted(
        command="generate",
        project_dir=project_dir,
        config_path=config_path,
        options={
            "tree": str(tree_path),
            "out": str(output_path) if output_path else None,
            "include_metadata": include_metadata,
        },
    )

    result = config_stage("generate", project_dir, config_path)
    yield from result.events
    if result.failed:
        yield ev.CommandCompleted(command="generate", ok=False, exit_code=2)
        return
    config = result.value
    if include_metadata is None:
        include_metadata = config.include_metadata

    yield ev.StageStarted(command="generate", stage_id="load_tree", label="Load property tree")
    started = time.perf_counter()
    try:
        properties, metadata = load_tree_file(
            tree_path,
            allocator=IdAllocator(config.id_prefix),
        )
    except SchemaBuilderError as exc:
        yield ev.StageFailed(
            command="generate",
            stage_id="load_tree",
            duration_ms=elapsed_ms(started),
            error_code="tree_error",
            message=str(exc),
        )
        yield ev.CommandCompleted(command="generate", ok=False, exit_code=2)
        return
    yield ev.TreeLoaded(
        command="generate",
        path=tree_path,
        properties=len(properties),
        nodes=count_nodes(properties),
    )
    yield ev.StageCompleted(
        command="generate",
        stage_id="load_tree",
        duration_ms=elapsed_ms(started),
        status="success",
    )

    yield ev.StageStarted(command="generate", stage_id="generate", label="Generate schema")
    started = time.perf_counter()
    drafts = [prop for prop in properties if not prop.key]
    if drafts:
        yield ev.Warning(
            command="generate",
            code="empty_key",
            message=f"Left out {len(drafts)} top-level properties without a key.",
        )
    try:
        schema = generate_schema(
            properties,
            metadata,
            include_metadata,
            max_depth=config.max_depth,
        )
    except SchemaBuilderError as exc:
        yield ev.StageFailed(
            command="generate",
            stage_id="generate",
            duration_ms=elapsed_ms(started),
            error_code="depth_error",
            message=str(exc),
            hint=DEPTH_HINT,
        )
        yield ev.CommandCompleted(command="generate", ok=False, exit_code=2)
        return
    yield ev.SchemaGenerated(
        command="generate",
        properties=len(schema.get("properties", {})),
        required=list(schema.get("required", [])),
    )
    yield ev.StageCompleted(
        command="generate",
        stage_id="generate",
        duration_ms=elapsed_ms(started),
        status="success",
    )

    yield ev.StageStarted(command="generate", stage_id="check_schema", label="Check schema")
    started = time.perf_counter()
    try:
        Draft202012Validator.check_schema(schema)
    except SchemaError as exc:
        yield ev.StageFailed(
            command="generate",
            stage_id="check_schema",
            duration_ms=elapsed_ms(started),
            error_code="schema_invalid",
            message=f"Generated schema is not valid: {exc.message}",
        )
        yield ev.CommandCompleted(command="generate", ok=False, exit_code=2)
        return
    yield ev.StageCompleted(
        command="generate",
        stage_id="check_schema",
        duration_ms=elapsed_ms(started),
        status="success",
    )

    text = dump_schema_text(schema, indent=config.indent)
    yield from write_output_events("generate", text, output_path)
