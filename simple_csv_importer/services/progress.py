from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress display with tqdm (TTY only).

In non-TTY environments (CI, pipes) no bar is created, so log output stays free
of ANSI control sequences.
"""

__all__ = [
    "RowProgressTracker",
    "is_tty_enabled",
]

T = TypeVar("T")


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class RowProgressTracker:
    """Progress bar over the rows of one file."""

    def __init__(self, total_rows: int | None = None, *, description: str = "Importing rows") -> None:
        """Initialize the tracker.

        Args:
            total_rows: Upper bound of rows to read (None = unknown)
            description: Description for the progress bar
        """
        self.total_rows = total_rows
        self.description = description
        self.rows_seen = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=description,
                unit="row",
                disable=False,
                leave=False,
                position=0,
                ncols=80,  # Standard width for consistency
                ascii=True,  # ASCII chars for better compatibility
            )
        else:
            self.pbar = None

    def track(self, rows: Iterable[T]) -> Iterator[T]:
        """Yield rows unchanged, advancing the bar for each one."""
        for row in rows:
            self.rows_seen += 1
            if self.pbar is not None:
                self.pbar.update(1)
            yield row

    def set_postfix(self, **kwargs: Any) -> None:
        if self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        """Close the progress bar."""
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
