from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable

from schemabuilder.core import events as ev
from schemabuilder.core.common import (
    DEPTH_HINT,
    config_stage,
    count_nodes,
    elapsed_ms,
    fetch_document_stage,
    resolve_path,
    write_output_events,
)
from schemabuilder.model.ids import IdAllocator
from schemabuilder.schema.documents import dump_tree_text
from schemabuilder.schema.errors import SchemaBuilderError
from schemabuilder.schema.lossy import find_dropped_constructs
from schemabuilder.schema.parser import parse_schema


def import_events(
    *,
    source: str,
    project_dir: Path = Path("."),
    config_path: Path | None = None,
    output_path: Path | None = None,
) -> Iterable[ev.BuilderEvent]:
    project_dir = project_dir.resolve()
    if output_path is not None:
        output_path = resolve_path(project_dir, output_path)

    yield ev.CommandStarted(
        command="import",
        project_dir=project_dir,
        config_path=config_path,
        options={"source": source, "out": str(output_path) if output_path else None},
    )

    result = config_stage("import", project_dir, config_path)
    yield from result.events
    if result.failed:
        yield ev.CommandCompleted(command="import", ok=False, exit_code=2)
        return
    config = result.value

    result = fetch_document_stage("import", source, project_dir)
    yield from result.events
    if result.failed:
        yield ev.CommandCompleted(command="import", ok=False, exit_code=2)
        return
    document = result.value

    yield ev.StageStarted(command="import", stage_id="analyze", label="Analyze constructs")
    started = time.perf_counter()
    dropped = find_dropped_constructs(document)
    for item in dropped:
        yield ev.Warning(command="import", code=item.code, message=item.message, path=item.path)
    yield ev.StageCompleted(
        command="import",
        stage_id="analyze",
        duration_ms=elapsed_ms(started),
        status="partial" if dropped else "success",
    )

    yield ev.StageStarted(command="import", stage_id="parse", label="Parse schema")
    started = time.perf_counter()
    try:
        parsed = parse_schema(
            document,
            allocator=IdAllocator(config.id_prefix),
            max_depth=config.max_depth,
        )
    except SchemaBuilderError as exc:
        yield ev.StageFailed(
            command="import",
            stage_id="parse",
            duration_ms=elapsed_ms(started),
            error_code="depth_error",
            message=str(exc),
            hint=DEPTH_HINT,
        )
        yield ev.CommandCompleted(command="import", ok=False, exit_code=2)
        return
    yield ev.TreeParsed(
        command="import",
        properties=len(parsed.properties),
        nodes=count_nodes(parsed.properties),
        has_metadata=parsed.metadata is not None,
    )
    yield ev.StageCompleted(
        command="import",
        stage_id="parse",
        duration_ms=elapsed_ms(started),
        status="success",
    )

    metadata = parsed.metadata if config.include_metadata else None
    text = dump_tree_text(parsed.properties, metadata)
    yield from write_output_events("import", text, output_path)
