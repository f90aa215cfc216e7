from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_CANONICAL_ENCODING,
    DEFAULT_HEADER_ROW_NUMBER,
    DEFAULT_MAX_ROWS,
    ImportConfig,
    ImporterSettings,
)

"""Config loader.

Responsibilities:
- Load the YAML import definition (config/import.yml by default)
- Validate it against config_schema.json (shipped next to this module)
- Apply defaults and build ImporterSettings

Consistency between columns/fields/encodings is NOT checked here; the importer
does that itself and reports PROPERTY_ERROR.
"""

__all__ = [
    "ConfigError",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or not valid JSON, or the config data
            fails validation (missing keys, wrong types, unknown keys)
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


def load_config(path: Path) -> ImporterSettings:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    config = ImportConfig(
        expected_columns=tuple(data["columns"]),
        field_names=tuple(data["fields"]),
        candidate_encodings=tuple(data["encodings"]),
        canonical_encoding=data.get("canonical_encoding", DEFAULT_CANONICAL_ENCODING),
        header_row_number=data.get("header_row", DEFAULT_HEADER_ROW_NUMBER),
        max_rows=data.get("max_rows", DEFAULT_MAX_ROWS),
        delimiter=data.get("delimiter", ","),
        quotechar=data.get("quotechar", '"'),
        skip_empty_rows=data.get("skip_empty_rows", True),
    )
    return ImporterSettings(
        config=config,
        rules=dict(data.get("rules") or {}),
        messages=dict(data.get("messages") or {}),
    )
