#!/usr/bin/env python3
"""Render a preset sphere scene.

This script demonstrates end-to-end rendering with the path tracer. It builds
one of the preset scenes, renders it on a pool of worker threads and writes
the image as PPM or PNG depending on the output extension.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene NAME            Preset scene (default: one_weekend)
    --width WIDTH           Image width in pixels (default: 1920)
    --aspect-ratio RATIO    Width / height (default: 1.7777...)
    --samples SAMPLES       Number of samples per pixel (default: 500)
    --depth DEPTH           Maximum bounces per sample (default: 20)
    --threads N             Worker threads (default: CPU count)
    --seed SEED             Master random seed (default: 1337)
    --output OUTPUT         Output file path, .ppm or .png (default: image.ppm)
    --strict                Fail if any worker fails instead of saving a partial image
    --quiet                 Suppress progress output

Example:
    python -m examples.render_scene --scene three_spheres --width 400 --samples 50
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np

from src.pathtracer.core.integrator import DEFAULT_MAX_DEPTH
from src.pathtracer.core.scheduler import RenderError, RenderSettings, render_with_settings
from src.pathtracer.preview.export import save_image
from src.pathtracer.preview.progress import StatusLine
from src.pathtracer.scene.presets import PRESETS, create_scene

logger = logging.getLogger("render_scene")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a preset sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=sorted(PRESETS),
        default="one_weekend",
        help="Preset scene (default: one_weekend)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1920,
        help="Image width in pixels (default: 1920)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=16.0 / 9.0,
        help="Image width divided by height (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=500,
        help="Number of samples per pixel (default: 500)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum bounces per sample (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=1337,
        help="Master random seed (default: 1337)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.ppm",
        help="Output file path, .ppm or .png (default: image.ppm)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if any worker fails instead of saving a partial image",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    scene_name: str = "one_weekend",
    width: int = 1920,
    aspect_ratio: float = 16.0 / 9.0,
    num_samples: int = 500,
    max_depth: int = DEFAULT_MAX_DEPTH,
    num_threads: int | None = None,
    seed: int | None = 1337,
    output_path: str = "image.ppm",
    strict: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a preset scene and save it to file.

    Args:
        scene_name: Key into PRESETS.
        width: Image width in pixels.
        aspect_ratio: Width divided by height; the height is derived from it.
        num_samples: Number of samples per pixel.
        max_depth: Maximum bounces per sample.
        num_threads: Worker thread count, or None for the CPU count.
        seed: Master seed for scene generation and rendering.
        output_path: Output file path (.ppm or .png).
        strict: Raise on any worker failure.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    settings = RenderSettings.for_aspect_ratio(
        width,
        aspect_ratio,
        samples_per_pixel=num_samples,
        max_depth=max_depth,
        num_threads=num_threads,
        seed=seed,
    )

    scene = create_scene(scene_name, aspect_ratio, np.random.default_rng(seed))
    logger.info("Built scene %r: %r", scene_name, scene)

    start_time = time.time()
    buffer = render_with_settings(
        scene,
        settings,
        strict=strict,
        progress=None if quiet else StatusLine(),
    )
    render_time = time.time() - start_time

    # Worker failures leave rows missing; keep what was drawn
    output_file = save_image(buffer, output_path, allow_incomplete=bool(buffer.failures))

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {render_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_scene(
            scene_name=args.scene,
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            num_samples=args.samples,
            max_depth=args.depth,
            num_threads=args.threads,
            seed=args.seed,
            output_path=args.output,
            strict=args.strict,
            quiet=args.quiet,
        )
        return 0
    except (RenderError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
