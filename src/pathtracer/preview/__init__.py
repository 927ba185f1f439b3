"""Preview module for output and progress display.

Components:
    export: PPM/PNG image export
    progress: Single-line console progress display

Example:
    >>> from src.pathtracer.preview import save_image
    >>> save_image(buffer, "output.png")
"""

from src.pathtracer.preview.export import (
    color_to_rgb8,
    encode_ppm,
    image_to_uint8,
    save_image,
    save_png,
    save_ppm,
    write_ppm,
)
from src.pathtracer.preview.progress import StatusLine, format_status

__all__ = [
    # Export functions
    "color_to_rgb8",
    "encode_ppm",
    "write_ppm",
    "save_ppm",
    "save_png",
    "save_image",
    "image_to_uint8",
    # Progress display
    "StatusLine",
    "format_status",
]
