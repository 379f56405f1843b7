from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class FileSource:
    """JSON Schema document on disk; relative paths resolve against the project."""

    kind = "file"

    def __init__(self, project_dir: Path, *, path: str | Path):
        path = Path(path)
        self.path = path if path.is_absolute() else project_dir / path

    def fetch(self) -> Any:
        with self.path.open(encoding="utf-8") as handle:
            return json.load(handle)

    def describe(self) -> str:
        return str(self.path)
