from __future__ import annotations

import logging
from collections import Counter

from charset_normalizer import from_bytes

from ..models.config_models import ImportConfig
from ..models.row_data import RawRow
from .errors import ColumnError
from .transcoder import decode_cells

"""Header row inspection: column check and source encoding detection.

The header cells arrive as raw bytes. Decoding them with each candidate encoding
and comparing against the expected columns tells us both whether the file has
the right columns and which encoding it was written in.
"""

__all__ = [
    "guess_encoding",
    "inspect_header",
]

logger = logging.getLogger(__name__)


def guess_encoding(row: RawRow, delimiter: str = ",") -> str | None:
    """Best-effort charset guess for a header row, used only in error messages."""
    match = from_bytes(delimiter.encode("ascii").join(row.cells)).best()
    return match.encoding if match is not None else None


def _candidate_views(row: RawRow, config: ImportConfig) -> list[tuple[str, list[str] | None]]:
    return [(encoding, decode_cells(row.cells, encoding)) for encoding in config.candidate_encodings]


def inspect_header(row: RawRow, config: ImportConfig) -> str:
    """Verify the header row and return the detected source encoding.

    1. Column set: some candidate's decoding of the header must hold exactly the
       expected columns (as a multiset, order ignored).
    2. Encoding: the first candidate, in declaration order, whose decoding equals
       expected_columns element by element is returned.

    Raises:
        ColumnError: columns differ, or no candidate reproduces the header in order
    """
    expected = list(config.expected_columns)
    views = _candidate_views(row, config)

    wanted = Counter(expected)
    if not any(values is not None and Counter(values) == wanted for _, values in views):
        logger.debug(f"header mismatch row={row.number} cells={list(row.cells)!r}")
        raise ColumnError(
            "The columns in the uploaded csv do not match the expected columns "
            f"(expected {len(expected)} columns: {expected})",
            row=row.number,
        )

    for encoding, values in views:
        if values == expected:
            logger.debug(f"header row={row.number} matched encoding={encoding}")
            return encoding

    hint = guess_encoding(row, config.delimiter)
    raise ColumnError(
        "The character code of the CSV file may have failed to be read, or the csv columns "
        f"may be partially invalid (candidates={list(config.candidate_encodings)}, "
        f"best guess={hint})",
        row=row.number,
    )
