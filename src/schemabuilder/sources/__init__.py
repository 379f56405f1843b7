from __future__ import annotations

from pathlib import Path

from .file import FileSource
from .http import HttpSource


def source_kind(location: str) -> str:
    if location.startswith(("http://", "https://")):
        return HttpSource.kind
    return FileSource.kind


def resolve_source(location: str, project_dir: Path) -> FileSource | HttpSource:
    """Pick the source for a CLI location argument: a URL or a file path."""
    if source_kind(location) == HttpSource.kind:
        return HttpSource(project_dir, url=location)
    return FileSource(project_dir, path=location)


__all__ = ["FileSource", "HttpSource", "resolve_source", "source_kind"]
