"""Console progress display for running renders.

StatusLine rewrites a single terminal line with the render counters:

    Drawing... (120/1080), 8 in progress

It can be passed directly as the ``progress`` callback of ``render()``, or
polled with ``StatusLine.update_from(buffer)``.
"""

from __future__ import annotations

import sys
import threading
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from src.pathtracer.core.buffer import Buffer

# Erase the current terminal line and return the cursor
_CLEAR_LINE = "\x1b[2K\r"


def format_status(returned: int, total: int, in_progress: int | None = None) -> str:
    """Format the status text for a render in progress."""
    if returned >= total:
        return "Drawing... Ok"
    text = f"Drawing... ({returned}/{total})"
    if in_progress is not None:
        text += f", {in_progress} in progress"
    return text


class StatusLine:
    """Thread-safe single-line progress printer.

    Attributes:
        stream: Destination stream (stderr by default).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self._lock = threading.Lock()

    def __call__(self, returned: int, total: int) -> None:
        self._write(format_status(returned, total), done=returned >= total)

    def update_from(self, buffer: Buffer) -> None:
        """Print the current counters of a buffer."""
        self._write(
            format_status(buffer.lines_returned, buffer.total_lines, buffer.lines_in_progress),
            done=buffer.is_complete,
        )

    def _write(self, text: str, *, done: bool) -> None:
        with self._lock:
            self.stream.write(_CLEAR_LINE + text + ("\n" if done else ""))
            self.stream.flush()
