"""Domain models for the CSV importer.

Configuration, raw rows, results and error records used throughout the package.
"""

from .config_models import ImportConfig, ImporterSettings
from .error_record import ErrorRecord
from .import_result import ErrorKind, ImportFailure, ImportResult, ImportStatus
from .row_data import RawRow, Record

__all__ = [
    # Configuration models
    "ImportConfig",
    "ImporterSettings",
    # Processing models
    "RawRow",
    "Record",
    # Result models
    "ErrorKind",
    "ImportFailure",
    "ImportResult",
    "ImportStatus",
    "ErrorRecord",
]
