"""Generic CSV importer core.

Subclass SimpleCsvImporter with the rules of a concrete file layout and call
execute() with a path, raw bytes, a binary stream or an iterable of RawRow.
"""

from .models import (
    ErrorKind,
    ImportConfig,
    ImportFailure,
    ImportResult,
    ImportStatus,
    RawRow,
)
from .services.errors import ColumnError, ImporterError, PropertyError
from .services.importer import ConfiguredCsvImporter, SimpleCsvImporter

__all__ = [
    "ColumnError",
    "ConfiguredCsvImporter",
    "ErrorKind",
    "ImportConfig",
    "ImportFailure",
    "ImportResult",
    "ImportStatus",
    "ImporterError",
    "PropertyError",
    "RawRow",
    "SimpleCsvImporter",
]
