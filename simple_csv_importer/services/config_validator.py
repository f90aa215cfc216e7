from __future__ import annotations

import codecs

from ..models.config_models import ImportConfig
from .errors import PropertyError

"""Pre-flight checks of an ImportConfig, run before the input is opened."""

__all__ = [
    "normalize_encoding",
    "validate_config",
]


def normalize_encoding(name: str) -> str:
    """Canonical codec name ("UTF-8", "utf8" -> "utf-8").

    Raises:
        LookupError: unknown codec
    """
    return codecs.lookup(name).name


def validate_config(config: ImportConfig) -> None:
    """Raise PropertyError when the schema is unusable.

    Checked in order: expected_columns defined, field_names defined, equal
    counts, candidate_encodings defined, then encoding names and row limits.
    """
    if not config.expected_columns:
        raise PropertyError("[expected_columns] is undefined")
    if not config.field_names:
        raise PropertyError("[field_names] is undefined")
    if len(config.expected_columns) != len(config.field_names):
        raise PropertyError(
            "The counts in [expected_columns] and the counts in [field_names] do not match "
            f"({len(config.expected_columns)} != {len(config.field_names)})"
        )
    if not config.candidate_encodings:
        raise PropertyError("Required property [candidate_encodings] is not defined")

    for name in (*config.candidate_encodings, config.canonical_encoding):
        try:
            normalize_encoding(name)
        except (LookupError, TypeError) as e:
            raise PropertyError(f"Unknown encoding [{name}]") from e

    if config.header_row_number < 1:
        raise PropertyError(
            f"[header_row_number] must be 1 or greater (got {config.header_row_number})"
        )
    if config.max_rows <= config.header_row_number:
        raise PropertyError(
            f"[max_rows] ({config.max_rows}) must be greater than "
            f"[header_row_number] ({config.header_row_number})"
        )
    for name in ("delimiter", "quotechar"):
        value = getattr(config, name)
        if len(value) != 1 or not value.isascii():
            raise PropertyError(f"[{name}] must be a single ASCII character (got {value!r})")
