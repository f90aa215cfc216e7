from __future__ import annotations

from dataclasses import dataclass

"""RawRow model: one delimited row as read from the source, before decoding."""

__all__ = [
    "RawRow",
    "Record",
]

# Transcoded, field-mapped row (field name -> value)
Record = dict[str, str]


@dataclass(frozen=True)
class RawRow:
    """A single row of the input file.

    cells hold the undecoded bytes of each field; the importer decodes them once
    the header row has revealed the source encoding.
    """
    number: int  # 1-based row index in the file
    cells: tuple[bytes, ...]

    def __len__(self) -> int:
        return len(self.cells)

    def is_empty(self) -> bool:
        """True for a blank line only; a row of empty fields (",") is not empty."""
        return not self.cells
