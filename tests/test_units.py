from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from schemabuilder.core.events import CommandStarted
from schemabuilder.sources import FileSource, HttpSource, resolve_source, source_kind
from schemabuilder.sources import http as http_module


def test_source_kind_detects_urls() -> None:
    assert source_kind("https://example.com/s.json") == "http"
    assert source_kind("http://localhost:8080/s.json") == "http"
    assert source_kind("schemas/s.json") == "file"


def test_file_source_reads_json_relative_to_project(tmp_path: Path) -> None:
    (tmp_path / "s.json").write_text(json.dumps({"type": "object"}), encoding="utf-8")

    source = resolve_source("s.json", tmp_path)

    assert isinstance(source, FileSource)
    assert source.fetch() == {"type": "object"}
    assert source.describe() == str(tmp_path / "s.json")


def test_file_source_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        FileSource(tmp_path, path="missing.json").fetch()


def test_http_source_fetches_json(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = {}

    def fake_get(url: str, **kwargs) -> httpx.Response:
        calls.update(url=url, **kwargs)
        return httpx.Response(
            200,
            json={"type": "object"},
            request=httpx.Request("GET", url),
        )

    monkeypatch.setattr(http_module.httpx, "get", fake_get)
    source = HttpSource(tmp_path, url="https://example.com:8443/schemas/a.json", timeout_s=5)

    assert source.fetch() == {"type": "object"}
    assert calls == {
        "url": "https://example.com:8443/schemas/a.json",
        "headers": {"Accept": "application/schema+json, application/json"},
        "timeout": 5,
        "follow_redirects": True,
    }
    assert source.describe() == "example.com:8443/schemas/a.json"


def test_http_source_raises_for_status(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_get(url: str, **kwargs) -> httpx.Response:
        return httpx.Response(404, request=httpx.Request("GET", url))

    monkeypatch.setattr(http_module.httpx, "get", fake_get)

    with pytest.raises(httpx.HTTPStatusError):
        resolve_source("https://example.com/missing.json", tmp_path).fetch()


def test_event_to_dict_serializes_paths() -> None:
    event = CommandStarted(
        command="generate",
        project_dir=Path("project"),
        config_path=Path("project") / "schemabuilder.yaml",
    )
    payload = event.to_dict()

    assert payload["project_dir"] == "project"
    assert payload["config_path"] == str(Path("project") / "schemabuilder.yaml")
    assert payload["type"] == "CommandStarted"
