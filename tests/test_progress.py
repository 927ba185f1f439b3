"""Tests for the console progress display."""

import io

from src.pathtracer.core.buffer import Buffer
from src.pathtracer.core.vec3 import WHITE
from src.pathtracer.preview.progress import StatusLine, format_status


class TestFormatStatus:
    """Tests for the status text."""

    def test_in_progress(self):
        assert format_status(3, 10) == "Drawing... (3/10)"

    def test_with_in_progress_count(self):
        assert format_status(3, 10, 4) == "Drawing... (3/10), 4 in progress"

    def test_done(self):
        assert format_status(10, 10, 0) == "Drawing... Ok"


class TestStatusLine:
    """Tests for the single-line printer."""

    def test_callback_rewrites_line(self):
        """Each update clears the line; the final one ends it."""
        stream = io.StringIO()
        status = StatusLine(stream)

        status(1, 2)
        status(2, 2)

        assert stream.getvalue() == "\x1b[2K\rDrawing... (1/2)\x1b[2K\rDrawing... Ok\n"

    def test_update_from_buffer(self):
        """Polling a buffer shows leased-but-unreturned rows."""
        stream = io.StringIO()
        buffer = Buffer(1, 4)
        buffer.lease_line()
        row = buffer.lease_line()
        buffer.push_line(row, [WHITE])

        StatusLine(stream).update_from(buffer)

        assert stream.getvalue() == "\x1b[2K\rDrawing... (1/4), 1 in progress"
