from __future__ import annotations

import codecs
import csv
import io
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from ..models.config_models import ImportConfig
from ..models.row_data import RawRow

"""CSV row source.

Rows are tokenized without knowing the file's encoding: the byte stream is read
through latin-1, which maps every byte to exactly one code point, so each cell
can be turned back into its original bytes. The importer decodes those bytes
once the header row has revealed the real encoding.

Only ASCII-compatible encodings work here (UTF-8, Shift_JIS/CP932, EUC-JP,
Latin-*, ...): the delimiter and quote characters must be single ASCII bytes
in the file. UTF-16/32 files are not supported.
"""

__all__ = [
    "CsvRowSource",
    "open_csv",
]

_PASSTHROUGH = "latin-1"
_BOM = codecs.BOM_UTF8.decode(_PASSTHROUGH)


def _strip_bom(lines: Iterable[str]) -> Iterator[str]:
    """Drop a UTF-8 BOM in front of the first line, before the CSV parser sees it."""
    for index, line in enumerate(lines):
        if index == 0 and line.startswith(_BOM):
            line = line[len(_BOM):]
        yield line


class CsvRowSource:
    """Iterate a binary CSV stream as RawRow objects numbered from 1.

    Row numbers count every CSV record, including blank lines that are skipped,
    so they line up with what a user sees in an editor for single-line records.
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        delimiter: str = ",",
        quotechar: str = '"',
        skip_empty_rows: bool = True,
    ) -> None:
        self._stream = stream
        self.delimiter = delimiter
        self.quotechar = quotechar
        self.skip_empty_rows = skip_empty_rows
        self.current_row = 0  # Number of the last row read

    @classmethod
    def from_bytes(cls, data: bytes, **options) -> CsvRowSource:
        """Row source over in-memory content (e.g. an uploaded file)."""
        return cls(io.BytesIO(data), **options)

    @classmethod
    def for_config(cls, stream: BinaryIO, config: ImportConfig) -> CsvRowSource:
        return cls(
            stream,
            delimiter=config.delimiter,
            quotechar=config.quotechar,
            skip_empty_rows=config.skip_empty_rows,
        )

    def __iter__(self) -> Iterator[RawRow]:
        text = io.TextIOWrapper(self._stream, encoding=_PASSTHROUGH, newline="")
        try:
            reader = csv.reader(
                _strip_bom(text), delimiter=self.delimiter, quotechar=self.quotechar
            )
            for number, cells in enumerate(reader, start=1):
                self.current_row = number
                raw = tuple(cell.encode(_PASSTHROUGH) for cell in cells)
                row = RawRow(number=number, cells=raw)
                if self.skip_empty_rows and row.is_empty():
                    continue
                yield row
        finally:
            # Hand the stream back to its owner instead of closing it
            if not text.closed:
                text.detach()


@contextmanager
def open_csv(path: Path | str, config: ImportConfig) -> Iterator[CsvRowSource]:
    """Open a CSV file as a row source; the file is closed on exit."""
    with Path(path).open("rb") as fh:
        yield CsvRowSource.for_config(fh, config)
