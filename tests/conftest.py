# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from simple_csv_importer.models.config_models import ImportConfig
from simple_csv_importer.services.importer import SimpleCsvImporter

USER_RULES: dict[str, Any] = {
    "name": {"type": "string", "minLength": 1},
    "age": {"type": "string", "pattern": "^[0-9]+$"},
}
USER_MESSAGES: dict[str, str] = {
    "age.pattern": "{field} must be numeric",
    "minLength": "{field} is required",
}


class UserImporter(SimpleCsvImporter):
    """Concrete importer used across the tests (name, age)."""

    def validation_rules(self) -> dict[str, Any]:
        return USER_RULES

    def validation_messages(self) -> dict[str, str]:
        return USER_MESSAGES


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def user_config() -> ImportConfig:
    return ImportConfig(
        expected_columns=("name", "age"),
        field_names=("name", "age"),
        candidate_encodings=("UTF-8",),
    )


@pytest.fixture()
def make_importer() -> Callable[..., UserImporter]:
    def factory(config: ImportConfig, **kwargs: Any) -> UserImporter:
        return UserImporter(config, **kwargs)
    return factory


@pytest.fixture()
def make_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write CSV text to a file in the given encoding."""
    def factory(text: str, encoding: str = "utf-8", name: str = "users.csv") -> Path:
        p = tmp_path / name
        p.write_bytes(text.encode(encoding))
        return p
    return factory


@pytest.fixture()
def sample_config_yaml() -> str:
    return """columns: [氏名, 年齢]
fields: [name, age]
encodings: [utf-8, shift_jis]
max_rows: 100
rules:
  name:
    type: string
    minLength: 1
  age:
    type: string
    pattern: "^[0-9]+$"
messages:
  age.pattern: "{field} must be numeric"
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_data(temp_workdir: Path) -> Callable[..., Path]:
    """Write a CSV file under data/ of the working directory."""
    def factory(text: str, encoding: str = "utf-8", name: str = "users.csv") -> Path:
        p = temp_workdir / "data" / name
        p.write_bytes(text.encode(encoding))
        return p
    return factory
