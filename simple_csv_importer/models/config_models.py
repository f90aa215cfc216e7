from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Config dataclasses for the CSV importer.

ImportConfig is the immutable schema of one import run. It is deliberately not
validated on construction: the importer checks it at the start of execute() so
that a broken schema is reported as PROPERTY_ERROR instead of raising.
"""

__all__ = [
    "DEFAULT_CANONICAL_ENCODING",
    "DEFAULT_HEADER_ROW_NUMBER",
    "DEFAULT_MAX_ROWS",
    "ImportConfig",
    "ImporterSettings",
]

DEFAULT_CANONICAL_ENCODING = "utf-8"
DEFAULT_HEADER_ROW_NUMBER = 1
# Rows are held in memory until execute() returns; keep the default conservative.
DEFAULT_MAX_ROWS = 1000


@dataclass(frozen=True)
class ImportConfig:
    """Schema of a single CSV import.

    expected_columns and field_names are positional: the i-th header value is
    stored under the i-th field name in every extracted record.
    """
    expected_columns: tuple[str, ...]  # Header values, in order
    field_names: tuple[str, ...]  # Record keys, same length as expected_columns
    candidate_encodings: tuple[str, ...]  # Tried in order during header detection
    canonical_encoding: str = DEFAULT_CANONICAL_ENCODING
    header_row_number: int = DEFAULT_HEADER_ROW_NUMBER  # 1-based
    max_rows: int = DEFAULT_MAX_ROWS  # Rows with index >= max_rows are not read
    delimiter: str = ","
    quotechar: str = '"'
    skip_empty_rows: bool = True

    def __post_init__(self) -> None:
        # Accept lists from callers but keep the frozen value hashable
        for name in ("expected_columns", "field_names", "candidate_encodings"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))


@dataclass(frozen=True)
class ImporterSettings:
    """Loaded configuration file: the import schema plus its validation rules."""
    config: ImportConfig
    rules: dict[str, Any] = field(default_factory=dict)  # field -> JSON Schema fragment
    messages: dict[str, str] = field(default_factory=dict)  # "field.keyword" -> template
