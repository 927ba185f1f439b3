"""Row-oriented output buffer shared by render workers.

The buffer holds one slot per image row. Rows are handed out by
``lease_line()`` in increasing order, each exactly once, and written back by
``push_line()``. Leasing, the write-back checks and the progress counters all
share one short lock, taken once per row.

Row 0 is the bottom of the image (camera ``t = 0``). Encoders emit rows top
first via ``rows_top_down()``.

Example:
    >>> from src.pathtracer.core.buffer import Buffer
    >>> from src.pathtracer.core.vec3 import WHITE
    >>> buffer = Buffer(2, 1)
    >>> row = buffer.lease_line()
    >>> buffer.push_line(row, [WHITE, WHITE])
    >>> buffer.is_complete
    True
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.pathtracer.core.vec3 import Color


@dataclass(frozen=True)
class WorkerFailure:
    """An exception raised by a render worker.

    Attributes:
        worker: Index of the worker that raised.
        row: The row it was rendering, or None if it held none.
        error: The exception it raised.
    """

    worker: int
    row: int | None
    error: BaseException


class Buffer:
    """A width x height grid of colors filled one row at a time.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        failures: Worker failures recorded by the scheduler. Non-empty means
            the render ran in degraded mode and some rows may be missing.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create an empty buffer.

        Raises:
            ValueError: If either dimension is not a positive integer.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions ({width}x{height}) must be positive")

        self.width = width
        self.height = height
        self.failures: list[WorkerFailure] = []

        self._rows: list[list[Color] | None] = [None] * height
        self._leased_lines = 0
        self._returned_lines = 0
        self._leasing_stopped = False
        self._stats_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Progress counters
    # -------------------------------------------------------------------------

    @property
    def total_lines(self) -> int:
        return self.height

    @property
    def lines_leased(self) -> int:
        """Number of rows claimed so far (never exceeds height)."""
        return self._leased_lines

    @property
    def lines_returned(self) -> int:
        """Number of rows fully computed and written back."""
        return self._returned_lines

    @property
    def lines_in_progress(self) -> int:
        return self.lines_leased - self.lines_returned

    @property
    def is_complete(self) -> bool:
        return self._returned_lines == self.height

    # -------------------------------------------------------------------------
    # Row leasing
    # -------------------------------------------------------------------------

    def lease_line(self) -> int | None:
        """Claim the next unclaimed row.

        Returns:
            The claimed row index, or None when every row has been leased
            or leasing was stopped.
        """
        with self._stats_lock:
            row = self._leased_lines
            if row >= self.height or self._leasing_stopped:
                return None
            self._leased_lines = row + 1
        return row

    def push_line(self, row: int, line: Sequence[Color]) -> None:
        """Write back a finished row.

        Args:
            row: The row index previously returned by lease_line().
            line: The row's colors, left to right.

        Raises:
            ValueError: If the line length does not match the width.
            RuntimeError: If the row was never leased or was already returned.
        """
        if len(line) != self.width:
            raise ValueError(f"Line has {len(line)} pixels, expected {self.width}")

        copied = list(line)
        with self._stats_lock:
            if not 0 <= row < self._leased_lines:
                raise RuntimeError(f"Row {row} was not leased")
            if self._rows[row] is not None:
                raise RuntimeError(f"Row {row} was already returned")
            self._rows[row] = copied
            self._returned_lines += 1

    def stop_leasing(self) -> None:
        """Make every later lease_line() call return None.

        Rows already leased can still be returned.
        """
        with self._stats_lock:
            self._leasing_stopped = True

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def line(self, row: int) -> list[Color] | None:
        """Get a returned row, or None if it has not been written."""
        return self._rows[row]

    def missing_rows(self) -> list[int]:
        """Row indices that have not been written back."""
        return [row for row, line in enumerate(self._rows) if line is None]

    def rows_top_down(self) -> Iterator[tuple[int, list[Color] | None]]:
        """Iterate ``(row, line)`` pairs from the top of the image down."""
        for row in range(self.height - 1, -1, -1):
            yield row, self._rows[row]

    def to_array(self) -> npt.NDArray[np.float64]:
        """Get the image as a NumPy array.

        Returns:
            Array of shape (height, width, 3), top row first. Missing rows
            are zero-filled.
        """
        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        for i, (_, line) in enumerate(self.rows_top_down()):
            if line is not None:
                image[i] = [tuple(color) for color in line]
        return image

    def __repr__(self) -> str:
        return (
            f"Buffer(width={self.width}, height={self.height}, "
            f"returned={self.lines_returned}/{self.height})"
        )
