from __future__ import annotations

from ..models.import_result import ErrorKind

"""Fatal importer errors.

Each error declares its ErrorKind; execute() classifies failures by that kind
(anything without one is a PROBLEM).
"""

__all__ = [
    "ColumnError",
    "ImporterError",
    "PropertyError",
]


class ImporterError(Exception):
    """Base exception for fatal import failures."""
    kind: ErrorKind = ErrorKind.PROBLEM


class PropertyError(ImporterError):
    """The import schema (ImportConfig) is inconsistent."""
    kind = ErrorKind.PROPERTY


class ColumnError(ImporterError):
    """The header row does not match the schema or its encoding is undetectable."""
    kind = ErrorKind.COLUMN

    def __init__(self, message: str, row: int | None = None) -> None:
        super().__init__(message)
        self.row = row
