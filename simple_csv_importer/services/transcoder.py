from __future__ import annotations

from collections.abc import Sequence

"""Row transcoding from the detected source encoding to the canonical one."""

__all__ = [
    "decode_cells",
    "transcode",
]


def decode_cells(cells: Sequence[bytes], encoding: str) -> list[str] | None:
    """Strictly decode every cell; None if any cell is not valid in encoding."""
    try:
        return [cell.decode(encoding) for cell in cells]
    except UnicodeDecodeError:
        return None


def transcode(cells: Sequence[bytes], source: str, target: str) -> list[str] | None:
    """Convert a row's cells from source to target encoding.

    Values come back as str. The conversion only counts as successful when every
    cell decodes from source and every decoded value is representable in target;
    otherwise None is returned and the caller records a row warning.
    """
    values = decode_cells(cells, source)
    if values is None:
        return None
    try:
        for value in values:
            value.encode(target)
    except UnicodeEncodeError:
        return None
    return values
