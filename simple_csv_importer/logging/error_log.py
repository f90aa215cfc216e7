from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from simple_csv_importer.logging.init import get_logger
from simple_csv_importer.models.error_record import UNKNOWN_ROW, ErrorRecord
from simple_csv_importer.models.import_result import ErrorKind

"""Error sinks and the JSON Lines error log buffer.

The importer reports each fatal failure exactly once to an ErrorSink. Sinks are
best-effort: the importer swallows anything they raise.

- LoggerErrorSink: ERROR line on the package logger
- BufferedErrorSink: same, plus an ErrorRecord appended to an ErrorLogBuffer
- ErrorLogBuffer: flushes to logs/errors-YYYYMMDD-HHMMSS.log (UTC), created on demand
"""

__all__ = [
    "BufferedErrorSink",
    "ErrorLogBuffer",
    "ErrorRecord",
    "ErrorSink",
    "LoggerErrorSink",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorSink(Protocol):
    def report(self, identifier: str, error: BaseException) -> None:
        ...


class LoggerErrorSink:
    """Report fatal failures on a logger (the package logger by default)."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        return self._logger if self._logger is not None else get_logger()

    def report(self, identifier: str, error: BaseException) -> None:
        self.logger.error(f"{identifier} error_message {type(error).__name__}: {error}")


class ErrorLogBuffer:
    """In-memory buffer for error records. flush() appends them as JSON Lines.

    The file path is fixed on first access. Not thread safe (serial use only).
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records. Returns the log path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp


class BufferedErrorSink(LoggerErrorSink):
    """Log the failure and keep a structured ErrorRecord for the error log file."""

    def __init__(
        self, buffer: ErrorLogBuffer, file: str, logger: logging.Logger | None = None
    ) -> None:
        super().__init__(logger)
        self.buffer = buffer
        self.file = file

    def report(self, identifier: str, error: BaseException) -> None:
        super().report(identifier, error)
        row = getattr(error, "row", None)
        self.buffer.append(
            ErrorRecord.create(
                file=self.file,
                row=row if isinstance(row, int) else UNKNOWN_ROW,
                error_type=ErrorKind.of(error).value,
                message=f"{identifier}: {error}",
            )
        )
