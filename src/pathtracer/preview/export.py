"""Image export utilities for rendered buffers.

This module serializes a finished Buffer to image files.

Supported formats:
    - PPM (plain-text ``P3`` pixmap)
    - PNG (8-bit RGB via Pillow)

Both formats share one quantization: a gamma-corrected channel value ``c``
maps to ``floor(256 * clamp(c, 0, 0.999))``, which always lands in [0, 255].

Rows are written top to bottom, i.e. the buffer's last row (the top of the
camera's view) comes first.

Example:
    >>> from src.pathtracer.preview.export import save_ppm
    >>> from src.pathtracer.core.scheduler import render
    >>>
    >>> buffer = render(scene, 320, 180, samples_per_pixel=10, max_depth=20)
    >>> save_ppm(buffer, "image.ppm")
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.pathtracer.core.vec3 import BLACK, Color

if TYPE_CHECKING:
    from src.pathtracer.core.buffer import Buffer

logger = logging.getLogger(__name__)

# Largest channel value before scaling; 256 * 0.999 stays below 256
MAX_CLAMP = 0.999

PPM_MAGIC = "P3"
PPM_MAX_VALUE = 256


def _channel_to_int(c: float) -> int:
    return int(256.0 * min(max(c, 0.0), MAX_CLAMP))


def color_to_rgb8(color: Color) -> tuple[int, int, int]:
    """Quantize a gamma-corrected color to 8-bit channels.

    Args:
        color: The color to convert. Components outside [0, 1] are clamped.

    Returns:
        Tuple (r, g, b) of integers in [0, 255].
    """
    return _channel_to_int(color.x), _channel_to_int(color.y), _channel_to_int(color.z)


def _check_complete(buffer: Buffer, allow_incomplete: bool) -> None:
    missing = buffer.missing_rows()
    if not missing:
        return
    if not allow_incomplete:
        raise ValueError(
            f"Buffer is incomplete: {len(missing)} row(s) missing {missing}. "
            "Pass allow_incomplete=True to encode them as black."
        )
    logger.warning("Encoding %d missing row(s) as black: %s", len(missing), missing)


def _lines_top_down(buffer: Buffer) -> Iterator[list[Color]]:
    for _, line in buffer.rows_top_down():
        yield line if line is not None else [BLACK] * buffer.width


def ppm_header(width: int, height: int) -> str:
    """Build the three-line plain PPM header."""
    return f"{PPM_MAGIC}\n{width} {height}\n{PPM_MAX_VALUE}\n"


def write_ppm(buffer: Buffer, stream: TextIO, *, allow_incomplete: bool = False) -> None:
    """Write a buffer to a text stream as a plain PPM image.

    Args:
        buffer: The rendered buffer.
        stream: Destination text stream.
        allow_incomplete: Encode missing rows as black instead of raising.

    Raises:
        ValueError: If the buffer has missing rows and allow_incomplete is False.
    """
    _check_complete(buffer, allow_incomplete)

    stream.write(ppm_header(buffer.width, buffer.height))
    for line in _lines_top_down(buffer):
        stream.write("".join("%d %d %d\n" % color_to_rgb8(color) for color in line))


def encode_ppm(buffer: Buffer, *, allow_incomplete: bool = False) -> str:
    """Encode a buffer as a plain PPM document.

    Returns:
        The complete file contents, header included.
    """
    _check_complete(buffer, allow_incomplete)
    chunks = [ppm_header(buffer.width, buffer.height)]
    for line in _lines_top_down(buffer):
        chunks.extend("%d %d %d\n" % color_to_rgb8(color) for color in line)
    return "".join(chunks)


def save_ppm(buffer: Buffer, filepath: str | Path, *, allow_incomplete: bool = False) -> Path:
    """Save a buffer as a plain PPM file.

    A partially written file is removed if writing fails.

    Args:
        buffer: The rendered buffer.
        filepath: Output file path (should end in .ppm).
        allow_incomplete: Encode missing rows as black instead of raising.

    Returns:
        The path written.

    Raises:
        ValueError: If the buffer is incomplete and allow_incomplete is False.
        OSError: If the file cannot be created or written.
    """
    path = Path(filepath)
    _check_complete(buffer, allow_incomplete)

    logger.info("Saving %dx%d PPM to %s", buffer.width, buffer.height, path)
    try:
        with path.open("w", encoding="ascii", newline="\n") as f:
            write_ppm(buffer, f, allow_incomplete=True)
    except OSError:
        path.unlink(missing_ok=True)
        raise
    return path


def image_to_uint8(buffer: Buffer, *, allow_incomplete: bool = False) -> npt.NDArray[np.uint8]:
    """Convert a buffer to an 8-bit NumPy image.

    Uses the same quantization as the PPM encoder.

    Returns:
        Array of shape (height, width, 3) with dtype uint8, top row first.
    """
    _check_complete(buffer, allow_incomplete)
    image = buffer.to_array()
    return (256.0 * np.clip(image, 0.0, MAX_CLAMP)).astype(np.uint8)


def save_png(buffer: Buffer, filepath: str | Path, *, allow_incomplete: bool = False) -> Path:
    """Save a buffer as an 8-bit RGB PNG file.

    Args:
        buffer: The rendered buffer.
        filepath: Output file path (should end in .png).
        allow_incomplete: Encode missing rows as black instead of raising.

    Returns:
        The path written.
    """
    path = Path(filepath)
    image_uint8 = image_to_uint8(buffer, allow_incomplete=allow_incomplete)

    logger.info("Saving %dx%d PNG to %s", buffer.width, buffer.height, path)
    pil_image = PILImage.fromarray(image_uint8)
    try:
        pil_image.save(path, format="PNG")
    except OSError:
        path.unlink(missing_ok=True)
        raise
    return path


def save_image(buffer: Buffer, filepath: str | Path, *, allow_incomplete: bool = False) -> Path:
    """Save a buffer, choosing the format from the file extension.

    Raises:
        ValueError: If the extension is neither .ppm nor .png.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()
    if suffix == ".ppm":
        return save_ppm(buffer, path, allow_incomplete=allow_incomplete)
    if suffix == ".png":
        return save_png(buffer, path, allow_incomplete=allow_incomplete)
    raise ValueError(f"Unsupported image format: {suffix!r} (expected .ppm or .png)")
