"""Tests for image export.

Tests cover:
- Channel quantization
- PPM header and pixel layout
- Incomplete buffers
- File output for PPM and PNG, including cleanup on failure
"""

import io

import numpy as np
import pytest
from PIL import Image as PILImage

from src.pathtracer.core.buffer import Buffer
from src.pathtracer.core.vec3 import BLACK, WHITE, Color
from src.pathtracer.preview.export import (
    color_to_rgb8,
    encode_ppm,
    image_to_uint8,
    ppm_header,
    save_image,
    save_png,
    save_ppm,
    write_ppm,
)


def filled_buffer(width, height, color_for_row):
    """Buffer whose every pixel in row r has color_for_row(r)."""
    buffer = Buffer(width, height)
    while (row := buffer.lease_line()) is not None:
        buffer.push_line(row, [color_for_row(row)] * width)
    return buffer


class TestQuantization:
    """Tests for color_to_rgb8."""

    def test_white_and_black(self):
        assert color_to_rgb8(WHITE) == (255, 255, 255)
        assert color_to_rgb8(BLACK) == (0, 0, 0)

    def test_out_of_range_clamped(self):
        """Values outside [0, 1] clamp to the ends."""
        assert color_to_rgb8(Color(-0.5, 2.0, 0.999)) == (0, 255, 255)

    def test_midpoint(self):
        """0.5 maps to 128."""
        assert color_to_rgb8(Color(0.5, 0.25, 0.0)) == (128, 64, 0)


class TestPPM:
    """Tests for the plain PPM encoder."""

    def test_header(self):
        assert ppm_header(3, 2) == "P3\n3 2\n256\n"

    def test_white_buffer(self):
        """Every pixel line of a white image is '255 255 255'."""
        text = encode_ppm(filled_buffer(2, 2, lambda row: WHITE))
        lines = text.splitlines()
        assert lines[:3] == ["P3", "2 2", "256"]
        assert lines[3:] == ["255 255 255"] * 4

    def test_black_buffer(self):
        text = encode_ppm(filled_buffer(3, 1, lambda row: BLACK))
        assert text.splitlines()[3:] == ["0 0 0"] * 3

    def test_top_row_first(self):
        """The highest row index is written first."""
        buffer = filled_buffer(1, 3, lambda row: Color(row / 2.0, 0.0, 0.0))
        lines = encode_ppm(buffer).splitlines()[3:]
        assert lines == ["255 0 0", "128 0 0", "0 0 0"]

    def test_line_count(self):
        """Header plus width * height pixel lines."""
        text = encode_ppm(filled_buffer(4, 3, lambda row: WHITE))
        assert len(text.splitlines()) == 3 + 12
        assert text.endswith("\n")

    def test_write_ppm_matches_encode(self):
        buffer = filled_buffer(2, 3, lambda row: Color(0.1 * row, 0.5, 0.9))
        stream = io.StringIO()
        write_ppm(buffer, stream)
        assert stream.getvalue() == encode_ppm(buffer)

    def test_incomplete_buffer_rejected(self):
        """Missing rows raise unless explicitly allowed."""
        buffer = Buffer(2, 2)
        buffer.push_line(buffer.lease_line(), [WHITE, WHITE])
        with pytest.raises(ValueError, match="incomplete"):
            encode_ppm(buffer)

    def test_incomplete_buffer_allowed(self):
        """With allow_incomplete, missing rows encode as black."""
        buffer = Buffer(2, 2)
        buffer.push_line(buffer.lease_line(), [WHITE, WHITE])
        lines = encode_ppm(buffer, allow_incomplete=True).splitlines()[3:]
        # Row 1 (top) is missing, row 0 (bottom) is white
        assert lines == ["0 0 0", "0 0 0", "255 255 255", "255 255 255"]


class TestSaveFiles:
    """Tests for writing image files."""

    def test_save_ppm(self, tmp_path):
        buffer = filled_buffer(2, 2, lambda row: WHITE)
        path = save_ppm(buffer, tmp_path / "out.ppm")
        assert path.read_text(encoding="ascii") == encode_ppm(buffer)

    def test_save_ppm_incomplete_writes_nothing(self, tmp_path):
        """Validation happens before the file is created."""
        path = tmp_path / "out.ppm"
        with pytest.raises(ValueError):
            save_ppm(Buffer(2, 2), path)
        assert not path.exists()

    def test_partial_file_removed_on_failure(self, tmp_path, monkeypatch):
        """A write error removes the half-written file and propagates."""
        from src.pathtracer.preview import export

        def failing_write(buffer, stream, *, allow_incomplete=False):
            stream.write("P3\n")
            raise OSError("disk full")

        monkeypatch.setattr(export, "write_ppm", failing_write)
        path = tmp_path / "out.ppm"

        with pytest.raises(OSError, match="disk full"):
            save_ppm(filled_buffer(1, 1, lambda row: WHITE), path)
        assert not path.exists()

    def test_unwritable_path(self, tmp_path):
        """Opening a file in a missing directory raises OSError."""
        with pytest.raises(OSError):
            save_ppm(filled_buffer(1, 1, lambda row: WHITE), tmp_path / "missing" / "out.ppm")

    def test_image_to_uint8(self):
        """The NumPy image uses the PPM quantization, top row first."""
        buffer = filled_buffer(2, 2, lambda row: WHITE if row == 0 else Color(0.5, 0.0, 0.0))
        image = image_to_uint8(buffer)
        assert image.shape == (2, 2, 3)
        assert image.dtype == np.uint8
        np.testing.assert_array_equal(image[0, 0], [128, 0, 0])
        np.testing.assert_array_equal(image[1, 1], [255, 255, 255])

    def test_save_png(self, tmp_path):
        """PNG output decodes back to the quantized pixels."""
        buffer = filled_buffer(3, 2, lambda row: Color(0.5, 0.25, 1.0))
        path = save_png(buffer, tmp_path / "out.png")

        with PILImage.open(path) as img:
            assert img.size == (3, 2)
            assert img.mode == "RGB"
            assert img.getpixel((0, 0)) == (128, 64, 255)

    def test_save_image_dispatch(self, tmp_path):
        buffer = filled_buffer(1, 1, lambda row: WHITE)
        assert save_image(buffer, tmp_path / "a.PPM").read_text().startswith("P3")
        with PILImage.open(save_image(buffer, tmp_path / "b.png")) as img:
            assert img.format == "PNG"

    def test_save_image_unknown_extension(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported image format"):
            save_image(filled_buffer(1, 1, lambda row: WHITE), tmp_path / "out.jpg")
