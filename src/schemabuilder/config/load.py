from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError
from ruamel.yaml import YAML

from .model import Config

DEFAULT_CONFIG_NAME = "schemabuilder.yaml"
ENABLE_METADATA_ENV = "SCHEMABUILDER_ENABLE_METADATA"


class ConfigError(RuntimeError):
    pass


_yaml = YAML(typ="safe")


def load_config(
    project_dir: Path,
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load ``schemabuilder.yaml``; the default file is optional, a named one is not."""
    explicit = config_path is not None
    config_path = config_path or Path(DEFAULT_CONFIG_NAME)
    if not config_path.is_absolute():
        config_path = project_dir / config_path

    data: Any = {}
    if config_path.exists():
        data = _load_yaml(config_path)
        if data is None:
            data = {}
    elif explicit:
        raise ConfigError(f"Missing config: {config_path}")
    if not isinstance(data, dict):
        raise ConfigError("Config must be a YAML mapping at the top level.")

    environ = os.environ if environ is None else environ
    override = environ.get(ENABLE_METADATA_ENV)
    if override is not None:
        data = {**data, "include_metadata": override.strip().lower() == "true"}

    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _load_yaml(path: Path) -> Any:
    try:
        return _yaml.load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to parse YAML: {path}") from exc
