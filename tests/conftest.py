from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from schemabuilder.model import SequentialIdAllocator  # noqa: E402


@pytest.fixture
def allocator() -> SequentialIdAllocator:
    return SequentialIdAllocator()


@pytest.fixture(autouse=True)
def _clear_metadata_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SCHEMABUILDER_ENABLE_METADATA", raising=False)


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    project_dir = tmp_path / "project"
    project_dir.mkdir(parents=True)
    (project_dir / "schemas").mkdir()

    (project_dir / "schemabuilder.yaml").write_text(
        """
version: v1
include_metadata: true
max_depth: 16
indent: 2
id_prefix: node
type_labels:
  file: Attachment
""".strip()
        + "\n",
        encoding="utf-8",
    )

    (project_dir / "person.tree.yaml").write_text(
        """
title: Person
description: A person record
version: 2.1.0
properties:
  - key: name
    type: string
    required: true
    minLength: 1
  - key: age
    type: integer
    minimum: 0
    maximum: 120
  - key: avatar
    type: file
  - key: tags
    type: array
    uniqueItems: true
    items:
      key: item
      type: string
  - key: address
    type: object
    children:
      - key: city
        type: string
        required: true
      - key: zip
        type: string
        pattern: "^[0-9]{5}$"
  - key: ""
    type: string
""".strip()
        + "\n",
        encoding="utf-8",
    )

    (project_dir / "schemas" / "order.schema.json").write_text(
        """
{
  "$schema": "https://json-schema.org/draft/2020-12/schema",
  "type": "object",
  "title": "Order",
  "properties": {
    "id": { "type": "string", "format": "uuid" },
    "total": { "type": "number", "minimum": 0 },
    "receipt": { "type": "string", "format": "filename" },
    "anything": true,
    "pair": { "type": "array", "items": [{ "type": "string" }, { "type": "number" }] },
    "customer": { "$ref": "#/$defs/customer" }
  },
  "required": ["id", "total"]
}
""".strip()
        + "\n",
        encoding="utf-8",
    )

    return project_dir
