from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import httpx

from schemabuilder.config.load import ConfigError, load_config
from schemabuilder.core import events as ev
from schemabuilder.model.property import Property
from schemabuilder.model.tree import walk
from schemabuilder.sources import resolve_source


CONFIG_HINT = "Check schemabuilder.yaml; allowed keys are version (v1), include_metadata, max_depth, indent, id_prefix and type_labels."
DEPTH_HINT = "Raise max_depth in schemabuilder.yaml to allow deeper nesting."


@dataclass
class StageResult:
    events: list[ev.BuilderEvent] = field(default_factory=list)
    failed: bool = False
    value: Any = None


def config_stage(
    command: str,
    project_dir: Path,
    config_path: Path | None,
) -> StageResult:
    started = time.perf_counter()
    events: list[ev.BuilderEvent] = [
        ev.StageStarted(command=command, stage_id="load_config", label="Load config")
    ]
    try:
        config = load_config(project_dir, config_path)
    except ConfigError as exc:
        events.append(
            ev.StageFailed(
                command=command,
                stage_id="load_config",
                duration_ms=elapsed_ms(started),
                error_code="config_error",
                message=str(exc),
                hint=CONFIG_HINT,
            )
        )
        return StageResult(events=events, failed=True)
    events.append(
        ev.ConfigLoaded(
            command=command,
            path=config_path,
            include_metadata=config.include_metadata,
        )
    )
    events.append(
        ev.StageCompleted(
            command=command,
            stage_id="load_config",
            duration_ms=elapsed_ms(started),
            status="success",
        )
    )
    return StageResult(events=events, value=config)


def fetch_document_stage(command: str, location: str, project_dir: Path) -> StageResult:
    started = time.perf_counter()
    events: list[ev.BuilderEvent] = [
        ev.StageStarted(command=command, stage_id="fetch_document", label="Fetch document")
    ]
    source = resolve_source(location, project_dir)
    message = None
    document: Any = None
    try:
        document = source.fetch()
    except FileNotFoundError:
        message = f"Schema not found: {source.describe()}"
    except ValueError:
        # json.JSONDecodeError and httpx's JSON decode failures are both ValueErrors.
        message = f"Invalid JSON schema: {source.describe()}"
    except httpx.HTTPError as exc:
        message = f"Failed to fetch {source.describe()}: {exc}"
    except OSError as exc:
        message = f"Failed to read {source.describe()}: {exc}"
    if message is None and not isinstance(document, dict):
        message = "Schema must be a JSON object."
    if message is not None:
        events.append(
            ev.StageFailed(
                command=command,
                stage_id="fetch_document",
                duration_ms=elapsed_ms(started),
                error_code="document_error",
                message=message,
            )
        )
        return StageResult(events=events, failed=True)
    events.append(ev.DocumentLoaded(command=command, source=source.describe(), source_type=source.kind))
    events.append(
        ev.StageCompleted(
            command=command,
            stage_id="fetch_document",
            duration_ms=elapsed_ms(started),
            status="success",
        )
    )
    return StageResult(events=events, value=document)


def write_output_events(
    command: str,
    text: str,
    output_path: Path | None,
) -> Iterable[ev.BuilderEvent]:
    yield ev.StageStarted(command=command, stage_id="write_output", label="Write output")
    started = time.perf_counter()
    if output_path is None:
        yield ev.OutputReady(command=command, text=text)
        yield ev.StageCompleted(
            command=command,
            stage_id="write_output",
            duration_ms=elapsed_ms(started),
            status="success",
        )
        yield ev.CommandCompleted(command=command, ok=True, exit_code=0)
        return
    try:
        if output_path.is_dir():
            raise OSError(f"Output path is a directory: {output_path}")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        payload = text.encode("utf-8")
        output_path.write_bytes(payload)
    except OSError as exc:
        yield ev.StageFailed(
            command=command,
            stage_id="write_output",
            duration_ms=elapsed_ms(started),
            error_code="write_error",
            message=f"Failed to write output: {exc}",
        )
        yield ev.CommandCompleted(command=command, ok=False, exit_code=2)
        return
    yield ev.FileWritten(command=command, path=output_path, bytes=len(payload))
    yield ev.StageCompleted(
        command=command,
        stage_id="write_output",
        duration_ms=elapsed_ms(started),
        status="success",
    )
    yield ev.CommandCompleted(command=command, ok=True, exit_code=0)


def count_nodes(properties: Iterable[Property]) -> int:
    return sum(1 for _ in walk(properties))


def resolve_path(project_dir: Path, path: Path) -> Path:
    if path.is_absolute():
        return path
    return project_dir / path


def elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
