"""Multi-threaded render scheduler.

This module drives a render: a fixed pool of worker threads repeatedly leases
the next unclaimed image row from the shared Buffer, computes every pixel of
that row and writes it back. The pool lives for one render only.

Scheduling guarantees:
    - Every row is leased exactly once and written by the worker that
      leased it.
    - Rows may finish in any order; the buffer is indexed by row, so the
      output does not depend on completion order.
    - Each row draws from its own random stream derived from the master seed
      and the row index, so a seeded render is bit-identical regardless of
      thread count.

Failure policy:
    An exception while rendering a row is caught inside the worker, which
    records it and goes on leasing, so only the rows that failed are lost.
    Failures are logged and recorded in ``buffer.failures`` after the join.
    This degraded result is returned to the caller unless ``strict=True``, in
    which case RenderError is raised. Exceptions from the progress callback
    are logged and never cost a row.

Example:
    >>> from src.pathtracer.core.scheduler import render
    >>> from src.pathtracer.scene.presets import three_spheres
    >>>
    >>> scene = three_spheres(2.0)
    >>> buffer = render(scene, 40, 20, samples_per_pixel=4, max_depth=10, seed=7)
    >>> buffer.is_complete
    True
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from src.pathtracer.core.buffer import Buffer, WorkerFailure
from src.pathtracer.core.integrator import DEFAULT_MAX_DEPTH, render_line
from src.pathtracer.scene.scene import Scene

logger = logging.getLogger(__name__)

# Callback receives (lines_returned, total_lines)
ProgressCallback = Callable[[int, int], None]


class RenderError(RuntimeError):
    """A render could not be started or did not complete acceptably.

    Attributes:
        buffer: The buffer as far as it got, or None if rendering never began.
    """

    def __init__(self, message: str, buffer: Buffer | None = None) -> None:
        super().__init__(message)
        self.buffer = buffer


def default_thread_count() -> int:
    """Number of worker threads matching the available hardware parallelism."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class RenderSettings:
    """Parameters for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Jittered samples averaged per pixel.
        max_depth: Maximum number of bounces per sample.
        num_threads: Worker thread count. None uses default_thread_count().
        seed: Master seed for all random streams. None draws fresh entropy.

    Raises:
        ValueError: If any parameter is out of range.
    """

    width: int
    height: int
    samples_per_pixel: int = 100
    max_depth: int = DEFAULT_MAX_DEPTH
    num_threads: int | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions ({self.width}x{self.height}) must be positive")
        if self.samples_per_pixel <= 0:
            raise ValueError(f"samples_per_pixel = {self.samples_per_pixel} must be positive")
        if self.max_depth < 0:
            raise ValueError(f"max_depth = {self.max_depth} must be non-negative")
        if self.num_threads is not None and self.num_threads <= 0:
            raise ValueError(f"num_threads = {self.num_threads} must be positive")

    @classmethod
    def for_aspect_ratio(cls, width: int, aspect_ratio: float, **kwargs) -> RenderSettings:
        """Build settings whose height follows from width and aspect ratio.

        Example:
            >>> RenderSettings.for_aspect_ratio(1920, 16.0 / 9.0).height
            1080
        """
        if aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {aspect_ratio} must be positive.")
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)

    @property
    def thread_count(self) -> int:
        return self.num_threads if self.num_threads is not None else default_thread_count()


def _row_rng(seed_seq: np.random.SeedSequence, row: int) -> np.random.Generator:
    """Independent generator for one row, derived from the master sequence."""
    child = np.random.SeedSequence(seed_seq.entropy, spawn_key=(*seed_seq.spawn_key, row))
    return np.random.default_rng(child)


def _report_progress(progress: ProgressCallback, buffer: Buffer) -> bool:
    """Invoke the progress callback, logging any exception it raises.

    Returns:
        False if the callback raised and should not be called again.
    """
    try:
        progress(buffer.lines_returned, buffer.total_lines)
    except Exception:
        logger.warning("Progress callback failed; disabling it for this worker", exc_info=True)
        return False
    return True


def _worker(
    index: int,
    scene: Scene,
    buffer: Buffer,
    settings: RenderSettings,
    seed_seq: np.random.SeedSequence,
    progress: ProgressCallback | None,
) -> tuple[int, list[WorkerFailure]]:
    """Lease and render rows until none remain.

    Returns:
        The number of rows this worker drew, and one WorkerFailure per row it
        could not produce.
    """
    lines_drawn = 0
    failures: list[WorkerFailure] = []
    while (row := buffer.lease_line()) is not None:
        try:
            line = render_line(
                scene,
                row,
                settings.width,
                settings.height,
                settings.samples_per_pixel,
                settings.max_depth,
                _row_rng(seed_seq, row),
            )
            buffer.push_line(row, line)
        except Exception as e:
            failures.append(WorkerFailure(worker=index, row=row, error=e))
            continue

        lines_drawn += 1
        if progress is not None and not _report_progress(progress, buffer):
            progress = None
    return lines_drawn, failures


def render_with_settings(
    scene: Scene,
    settings: RenderSettings,
    *,
    strict: bool = False,
    progress: ProgressCallback | None = None,
) -> Buffer:
    """Render a scene into a new Buffer.

    Args:
        scene: The scene to render. Must not be mutated during the render.
        settings: Image size, sampling and threading parameters.
        strict: If True, any worker failure raises RenderError instead of
            returning a degraded buffer.
        progress: Optional callback invoked from worker threads after every
            returned row with (lines_returned, total_lines).

    Returns:
        The populated Buffer. Check ``buffer.failures`` / ``buffer.is_complete``
        for degraded results when ``strict`` is False.

    Raises:
        RenderError: If the thread pool cannot be started, or a worker failed
            and ``strict`` is True.
    """
    buffer = Buffer(settings.width, settings.height)
    seed_seq = np.random.SeedSequence(settings.seed)
    num_threads = settings.thread_count

    logger.info(
        "Rendering %dx%d, %d spp, depth %d on %d threads",
        settings.width,
        settings.height,
        settings.samples_per_pixel,
        settings.max_depth,
        num_threads,
    )

    futures: list[Future[tuple[int, list[WorkerFailure]]]] = []
    pool = ThreadPoolExecutor(max_workers=num_threads, thread_name_prefix="render")
    try:
        for index in range(num_threads):
            futures.append(
                pool.submit(_worker, index, scene, buffer, settings, seed_seq, progress)
            )
    except RuntimeError as e:
        # Raised when the OS refuses to start another thread. Workers already
        # running finish their current row and stop.
        buffer.stop_leasing()
        raise RenderError(f"Could not start render threads: {e}", buffer) from e
    finally:
        pool.shutdown(wait=True)

    lines_per_thread = []
    for index, future in enumerate(futures):
        try:
            lines_drawn, failures = future.result()
        except Exception as e:
            logger.error("Render worker %d failed: %r", index, e)
            buffer.failures.append(WorkerFailure(worker=index, row=None, error=e))
            continue
        lines_per_thread.append(lines_drawn)
        for failure in failures:
            logger.error(
                "Render worker %d failed on row %d: %r",
                failure.worker,
                failure.row,
                failure.error,
            )
        buffer.failures.extend(failures)

    logger.info("Lines drawn per thread: %s", ", ".join(str(n) for n in lines_per_thread))

    if buffer.failures:
        missing = buffer.missing_rows()
        logger.warning(
            "%d row failure(s); %d row(s) missing: %s",
            len(buffer.failures),
            len(missing),
            missing,
        )
        if strict:
            raise RenderError(
                f"{len(buffer.failures)} row failure(s) during render; missing rows {missing}",
                buffer,
            ) from buffer.failures[0].error

    return buffer


def render(
    scene: Scene,
    width: int,
    height: int,
    samples_per_pixel: int,
    max_depth: int,
    *,
    num_threads: int | None = None,
    seed: int | None = None,
    strict: bool = False,
    progress: ProgressCallback | None = None,
) -> Buffer:
    """Render a scene and return the populated buffer.

    Convenience wrapper around render_with_settings().

    Args:
        scene: The scene to render.
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Jittered samples averaged per pixel.
        max_depth: Maximum number of bounces per sample.
        num_threads: Worker thread count (default: CPU count).
        seed: Master seed; a fixed seed gives a reproducible image.
        strict: Raise RenderError on any worker failure.
        progress: Optional (lines_returned, total_lines) callback.

    Returns:
        The populated Buffer.
    """
    settings = RenderSettings(
        width=width,
        height=height,
        samples_per_pixel=samples_per_pixel,
        max_depth=max_depth,
        num_threads=num_threads,
        seed=seed,
    )
    return render_with_settings(scene, settings, strict=strict, progress=progress)
