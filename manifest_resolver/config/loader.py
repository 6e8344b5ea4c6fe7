from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..services.workbook_loader import DEFAULT_BASE_GROUP, ColumnLabels, LoaderSettings

"""Config loader.

Responsibilities:
- Load the YAML config (config/resolver.yml by default)
- Validate it against config_schema.json (shipped next to this module)
- Apply defaults (base_group="MCC Base", standard column labels)
- Let MANIFEST_SOURCE_PATH override source_path
"""

__all__ = [
    "ConfigError",
    "ResolverConfig",
    "DEFAULT_CONFIG_PATH",
    "SOURCE_PATH_ENV",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/resolver.yml")
SOURCE_PATH_ENV = "MANIFEST_SOURCE_PATH"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ResolverConfig:
    source_path: str  # Workbook file to read
    base_group: str = DEFAULT_BASE_GROUP
    columns: ColumnLabels = ColumnLabels()

    @property
    def loader_settings(self) -> LoaderSettings:
        return LoaderSettings(base_group=self.base_group, columns=self.columns)


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ResolverConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    columns = ColumnLabels(**data.get("columns", {}))
    source_path = os.getenv(SOURCE_PATH_ENV) or data["source_path"]
    return ResolverConfig(
        source_path=source_path,
        base_group=data.get("base_group", DEFAULT_BASE_GROUP),
        columns=columns,
    )
