from __future__ import annotations

import io
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, BinaryIO, Union

from ..csvfile.reader import CsvRowSource, open_csv
from ..logging.error_log import ErrorSink, LoggerErrorSink
from ..models.config_models import ImportConfig, ImporterSettings
from ..models.import_result import ImportResult, ImportStatus
from ..models.row_data import RawRow, Record
from .aggregator import ResultAggregator, default_final_status
from .config_validator import validate_config
from .errors import ColumnError
from .header_inspector import inspect_header
from .progress import RowProgressTracker
from .record_validator import JsonSchemaRecordValidator, RecordValidator
from .transcoder import transcode

"""Importer core: turns one CSV source into an ImportResult.

Concrete importers subclass SimpleCsvImporter, supply the validation rules and
messages, and may override the hooks is_break / is_skip_line / final_status /
post_process. execute() runs the whole pipeline in a single pass:

    validate config -> open source -> per row:
        break? -> header? (detect encoding) -> skip? -> transcode -> map fields
        -> validate -> collect
    -> final status

execute() never raises; every failure ends up in the returned result.
"""

__all__ = [
    "ConfiguredCsvImporter",
    "SimpleCsvImporter",
    "SourceInput",
    "map_fields",
]

logger = logging.getLogger(__name__)

# Path, raw content, binary stream, or rows already read by the caller
SourceInput = Union[str, os.PathLike, bytes, BinaryIO, Iterable[RawRow]]


def map_fields(values: Sequence[str], field_names: Sequence[str]) -> Record:
    """Key a row's values by field name; empty when the cell count is off."""
    if len(values) != len(field_names):
        return {}
    return dict(zip(field_names, values))


class SimpleCsvImporter(ABC):
    """Base class for schema-specific CSV importers."""

    def __init__(
        self,
        config: ImportConfig,
        *,
        error_sink: ErrorSink | None = None,
        record_validator: RecordValidator | None = None,
        progress: RowProgressTracker | None = None,
    ) -> None:
        self.config = config
        self.error_sink: ErrorSink = error_sink if error_sink is not None else LoggerErrorSink()
        self.record_validator: RecordValidator = (
            record_validator if record_validator is not None else JsonSchemaRecordValidator()
        )
        self.progress = progress

    # ===== To be implemented by concrete importers =====

    @abstractmethod
    def validation_rules(self) -> Mapping[str, Any]:
        """Validation rules per field name."""

    @abstractmethod
    def validation_messages(self) -> Mapping[str, str]:
        """Message templates for rule violations."""

    # ===== Overridable hooks =====

    def is_break(self, row: RawRow) -> bool:
        """Stop reading at this row (rows from max_rows onward are never read)."""
        return row.number >= self.config.max_rows

    def is_skip_line(self, row: RawRow) -> bool:
        """Skip this row without extracting it (the header row by default)."""
        return row.number == self.config.header_row_number

    def final_status(self, aggregator: ResultAggregator) -> ImportStatus:
        """Status of a run that completed without a fatal error."""
        return default_final_status(aggregator)

    def post_process(self, record: Record) -> dict[str, Any]:
        """Adjust a valid record before it is stored (returned unchanged by default)."""
        return record

    # ===== Execution =====

    @property
    def identifier(self) -> str:
        return f"{type(self).__qualname__}.execute"

    def execute(self, source: SourceInput) -> ImportResult:
        """Import source and return the result. Never raises."""
        aggregator = ResultAggregator()
        try:
            validate_config(self.config)
            with self._open(source) as rows:
                self._extract(rows, aggregator)
            if aggregator.status is ImportStatus.SUCCESS:
                aggregator.status = self.final_status(aggregator)
        except Exception as e:
            self._report(e)
            aggregator.fail(e)

        result = aggregator.to_result()
        logger.debug(
            f"import finished status={int(result.status)} extracted={len(result.extracted)} "
            f"invalid={len(result.invalid)} warnings={len(result.warnings)}"
        )
        return result

    def _report(self, error: Exception) -> None:
        try:
            self.error_sink.report(self.identifier, error)
        except Exception as sink_error:
            logger.debug(f"error sink failed: {sink_error!r}")

    @contextmanager
    def _open(self, source: SourceInput) -> Iterator[Iterable[RawRow]]:
        if isinstance(source, (str, os.PathLike)):
            with open_csv(source, self.config) as rows:
                yield rows
        elif isinstance(source, (bytes, bytearray)):
            yield CsvRowSource.for_config(io.BytesIO(bytes(source)), self.config)
        elif hasattr(source, "read"):
            yield CsvRowSource.for_config(source, self.config)  # type: ignore[arg-type]
        else:
            yield source  # type: ignore[misc]

    def _extract(self, rows: Iterable[RawRow], aggregator: ResultAggregator) -> None:
        config = self.config
        rules = self.validation_rules()
        messages = self.validation_messages()
        encoding: str | None = None
        header_seen = False

        if self.progress is not None:
            rows = self.progress.track(rows)

        for row in rows:
            index = row.number

            if self.is_break(row):
                aggregator.add_warning(
                    f"Since the maximum number of rows to be read ({config.max_rows}) has been "
                    f"exceeded, reading from row {index} onward was interrupted."
                )
                break

            if index == config.header_row_number:
                encoding = inspect_header(row, config)
                aggregator.encoding = encoding
                header_seen = True
                logger.debug(f"detected encoding={encoding}")

            if self.is_skip_line(row):
                continue

            # Rows above the header have no known encoding yet
            values = None
            if encoding is not None:
                values = transcode(row.cells, encoding, config.canonical_encoding)
            if values is None:
                aggregator.add_warning(
                    f"Row {index}: failed to extract the result because the character code "
                    "conversion failed."
                )
                continue

            record = map_fields(values, config.field_names)
            violations = self.record_validator.validate(record, rules, messages)
            if violations:
                aggregator.add_invalid(index, violations)

            if record and not violations:
                aggregator.add_extract(self.post_process(record))
            else:
                aggregator.add_extract_failure(index)

        if self.progress is not None:
            self.progress.set_postfix(
                extracted=len(aggregator.extracted), warnings=len(aggregator.warnings)
            )

        if not header_seen:
            raise ColumnError(f"Header row {config.header_row_number} was not found in the csv")


class ConfiguredCsvImporter(SimpleCsvImporter):
    """Importer whose rules and messages come from a loaded configuration file."""

    def __init__(self, settings: ImporterSettings, **kwargs: Any) -> None:
        super().__init__(settings.config, **kwargs)
        self.settings = settings

    def validation_rules(self) -> Mapping[str, Any]:
        return self.settings.rules

    def validation_messages(self) -> Mapping[str, str]:
        return self.settings.messages
