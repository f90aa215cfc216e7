from __future__ import annotations

from typing import Any

from ..models.import_result import ImportFailure, ImportResult, ImportStatus

"""Result accumulation for a single import run."""

__all__ = [
    "ResultAggregator",
    "default_final_status",
]


class ResultAggregator:
    """Mutable state of one execute() call, frozen into an ImportResult at the end.

    Owned by exactly one run; never shared between runs.
    """

    def __init__(self) -> None:
        self.status = ImportStatus.SUCCESS
        self.extracted: list[dict[str, Any]] = []
        self.invalid: dict[int, list[str]] = {}
        self.warnings: list[str] = []
        self.fatal_error: ImportFailure | None = None
        self.encoding: str | None = None

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_invalid(self, row_number: int, messages: list[str]) -> None:
        self.invalid[row_number] = list(messages)

    def add_extract(self, record: dict[str, Any]) -> None:
        self.extracted.append(record)

    def add_extract_failure(self, row_number: int) -> None:
        self.add_warning(f"Row {row_number}: failed to extract the result of the line.")

    def fail(self, error: BaseException) -> None:
        """Record a fatal failure; the status follows the error's kind."""
        failure = ImportFailure.from_exception(error)
        self.status = failure.kind.status
        self.fatal_error = failure

    def to_result(self) -> ImportResult:
        return ImportResult(
            status=self.status,
            extracted=tuple(self.extracted),
            invalid={row: tuple(msgs) for row, msgs in self.invalid.items()},
            warnings=tuple(self.warnings),
            fatal_error=self.fatal_error,
            encoding=self.encoding,
        )


def default_final_status(aggregator: ResultAggregator) -> ImportStatus:
    """Status of a run that finished without a fatal error.

    Invalid rows without any warning fall through to PROBLEM. In practice every
    invalid row also produces a warning, so PARTIALLY_ERROR is what callers see.
    """
    if not aggregator.invalid and not aggregator.warnings and aggregator.fatal_error is None:
        return ImportStatus.SUCCESS
    if aggregator.warnings:
        return ImportStatus.PARTIALLY_ERROR
    return ImportStatus.PROBLEM
