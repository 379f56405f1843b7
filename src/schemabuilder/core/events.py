from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class BuilderEvent:
    ts: float = field(default_factory=time.perf_counter)
    level: str = "INFO"
    command: str = ""
    type: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _serialize(asdict(self))


@dataclass(frozen=True)
class CommandStarted(BuilderEvent):
    type: str = "CommandStarted"
    project_dir: Path | None = None
    config_path: Path | None = None
    options: dict[str, Any] | None = None


@dataclass(frozen=True)
class CommandCompleted(BuilderEvent):
    type: str = "CommandCompleted"
    ok: bool = True
    exit_code: int = 0


@dataclass(frozen=True)
class StageStarted(BuilderEvent):
    type: str = "StageStarted"
    stage_id: str = ""
    label: str = ""


@dataclass(frozen=True)
class StageCompleted(BuilderEvent):
    type: str = "StageCompleted"
    stage_id: str = ""
    duration_ms: float = 0.0
    status: str = "success"


@dataclass(frozen=True)
class StageFailed(BuilderEvent):
    type: str = "StageFailed"
    level: str = "ERROR"
    stage_id: str = ""
    duration_ms: float = 0.0
    error_code: str = ""
    message: str = ""
    hint: str | None = None


@dataclass(frozen=True)
class Warning(BuilderEvent):
    type: str = "Warning"
    level: str = "WARNING"
    code: str = ""
    message: str = ""
    path: str | None = None


@dataclass(frozen=True)
class ConfigLoaded(BuilderEvent):
    type: str = "ConfigLoaded"
    path: Path | None = None
    include_metadata: bool = True


@dataclass(frozen=True)
class TreeLoaded(BuilderEvent):
    type: str = "TreeLoaded"
    path: Path | None = None
    properties: int = 0
    nodes: int = 0


@dataclass(frozen=True)
class DocumentLoaded(BuilderEvent):
    type: str = "DocumentLoaded"
    source: str = ""
    source_type: str = ""


@dataclass(frozen=True)
class SchemaGenerated(BuilderEvent):
    type: str = "SchemaGenerated"
    properties: int = 0
    required: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TreeParsed(BuilderEvent):
    type: str = "TreeParsed"
    properties: int = 0
    nodes: int = 0
    has_metadata: bool = False


@dataclass(frozen=True)
class TreeRendered(BuilderEvent):
    type: str = "TreeRendered"
    title: str | None = None
    rows: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class OutputReady(BuilderEvent):
    type: str = "OutputReady"
    text: str = ""


@dataclass(frozen=True)
class FileWritten(BuilderEvent):
    type: str = "FileWritten"
    path: Path | None = None
    bytes: int = 0


def _serialize(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {key: _serialize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    return value
