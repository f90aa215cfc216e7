from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import pandas as pd

"""Import result models for the CSV importer.

ImportResult is the only value execute() hands back to the caller. Status codes
keep their historical integer values because existing consumers compare against
the numbers, not the names.
"""

__all__ = [
    "ErrorKind",
    "ImportFailure",
    "ImportResult",
    "ImportStatus",
]


class ImportStatus(IntEnum):
    """Terminal status of an import.

    - SUCCESS: every row extracted, nothing to report
    - PARTIALLY_ERROR: finished, but at least one row produced a warning
    - PROPERTY_ERROR: the import schema is inconsistent, no row was read
    - COLUMN_ERROR: header mismatch or undetectable encoding
    - PROBLEM: any other failure
    """
    SUCCESS = 200
    PARTIALLY_ERROR = 105
    COLUMN_ERROR = 100
    PROPERTY_ERROR = 5
    PROBLEM = 0


class ErrorKind(Enum):
    """Classification of fatal failures, carried by the exception itself."""
    PROPERTY = "PROPERTY_ERROR"
    COLUMN = "COLUMN_ERROR"
    PROBLEM = "PROBLEM"

    @property
    def status(self) -> ImportStatus:
        return _KIND_STATUS[self]

    @classmethod
    def of(cls, error: BaseException) -> ErrorKind:
        """Kind declared by an importer error, PROBLEM for anything else."""
        kind = getattr(error, "kind", None)
        return kind if isinstance(kind, cls) else cls.PROBLEM


_KIND_STATUS = {
    ErrorKind.PROPERTY: ImportStatus.PROPERTY_ERROR,
    ErrorKind.COLUMN: ImportStatus.COLUMN_ERROR,
    ErrorKind.PROBLEM: ImportStatus.PROBLEM,
}


@dataclass(frozen=True)
class ImportFailure:
    """Fatal error attached to a result.

    The original exception is kept in cause for debugging but does not take part
    in equality, so two runs over the same input compare equal.
    """
    kind: ErrorKind
    message: str
    error_type: str  # Exception class name
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    @staticmethod
    def from_exception(error: BaseException) -> ImportFailure:
        return ImportFailure(
            kind=ErrorKind.of(error),
            message=str(error),
            error_type=type(error).__name__,
            cause=error,
        )


@dataclass(frozen=True)
class ImportResult:
    """Outcome of one import run."""
    status: ImportStatus
    extracted: tuple[dict[str, Any], ...] = ()  # Records that passed validation
    invalid: dict[int, tuple[str, ...]] = field(default_factory=dict)  # row -> messages
    warnings: tuple[str, ...] = ()
    fatal_error: ImportFailure | None = None
    encoding: str | None = None  # Detected source encoding

    @property
    def ok(self) -> bool:
        return self.status is ImportStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Plain representation with the status as its integer code."""
        error = None
        if self.fatal_error is not None:
            error = {
                "kind": self.fatal_error.kind.value,
                "type": self.fatal_error.error_type,
                "message": self.fatal_error.message,
            }
        return {
            "status": int(self.status),
            "encoding": self.encoding,
            "extracted": [dict(r) for r in self.extracted],
            "invalid": {row: list(msgs) for row, msgs in self.invalid.items()},
            "warnings": list(self.warnings),
            "error": error,
        }

    def to_frame(self, columns: list[str] | None = None) -> pd.DataFrame:
        """Extracted records as a DataFrame (one column per field)."""
        import pandas as pd

        return pd.DataFrame(list(self.extracted), columns=columns)
