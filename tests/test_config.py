from __future__ import annotations

from pathlib import Path

import pytest

from schemabuilder.config import Config, ConfigError, load_config


def test_missing_default_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={})

    assert config == Config()
    assert config.include_metadata is True
    assert config.max_depth == 64
    assert config.id_prefix == "prop"


def test_explicit_missing_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Missing config"):
        load_config(tmp_path, Path("other.yaml"), environ={})


def test_loads_project_config(sample_project: Path) -> None:
    config = load_config(sample_project, environ={})

    assert config.max_depth == 16
    assert config.id_prefix == "node"
    assert config.type_labels == {"file": "Attachment"}


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "schemabuilder.yaml").write_text("", encoding="utf-8")
    assert load_config(tmp_path, environ={}) == Config()


@pytest.mark.parametrize(
    ("value", "expected"),
    [("true", True), ("TRUE", True), (" True ", True), ("false", False), ("1", False), ("", False)],
)
def test_metadata_env_override(tmp_path: Path, value: str, expected: bool) -> None:
    (tmp_path / "schemabuilder.yaml").write_text("include_metadata: true\n", encoding="utf-8")

    config = load_config(tmp_path, environ={"SCHEMABUILDER_ENABLE_METADATA": value})

    assert config.include_metadata is expected


def test_metadata_env_read_from_process(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHEMABUILDER_ENABLE_METADATA", "false")
    assert load_config(tmp_path).include_metadata is False


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("version: v2\n", "Only version v1"),
        ("type_labels:\n  blob: Blob\n", "Unknown types in type_labels: blob"),
        ("id_prefix: '  '\n", "id_prefix must be a non-empty string"),
        ("max_depth: 0\n", "max_depth"),
        ("surprise: 1\n", "surprise"),
        ("- a\n- b\n", "mapping at the top level"),
        ("key: [unclosed\n", "Failed to parse YAML"),
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str, message: str) -> None:
    (tmp_path / "schemabuilder.yaml").write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path, environ={})
