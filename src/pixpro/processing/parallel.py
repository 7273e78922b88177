"""
Parallel region processor: the generic row-parallel apply loop.

Turns a per-pixel operation into a clipped, row-partitioned, thread-parallel
image transform:

1. Scan bounds come from the source rectangle; rows outside its vertical band
   are never touched.
2. Scoped accessors are acquired on source and target for the whole call and
   released on every exit path.
3. The scanned rows are split into contiguous chunks, one per worker. Each row
   is visited exactly once, so no two workers ever write the same cell.
4. One progress notification is emitted per completed row.

Example:
    >>> engine = ParallelRegionProcessor(max_workers=4)
    >>> rect = Rectangle(0, 0, buffer.width, buffer.height)
    >>> engine.apply(out, buffer, rect, rect, 0, buffer.height, lambda c: c)
"""

from __future__ import annotations

import logging
import numbers
import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Any

import numpy as np

from pixpro.color.space import Color
from pixpro.constants import DEFAULT_MAX_WORKERS, MIN_WORKERS
from pixpro.geometry import Rectangle
from pixpro.protocols import BufferProvider, PixelTransform, ProgressSink
from pixpro.validators import must_be_in_range, validate_positive, validate_type

logger = logging.getLogger(__name__)

PixelFunction = Callable[[Color], Color]
RowFunction = Callable[[np.ndarray, np.ndarray], None]
RowCallback = Callable[[int], None]


@dataclass(frozen=True)
class ProcessingJob:
    """
    Parameters of a single apply call.

    Attributes:
        target: Buffer written to
        source: Buffer read from (may be ``target`` for in-place use)
        target_rectangle: Nominal region of interest in the target
        source_rectangle: Region scanned in the source; drives the loop bounds
        start_row: First target row in scope (inclusive)
        end_row: Last target row in scope (exclusive)
    """

    target: BufferProvider
    source: BufferProvider
    target_rectangle: Rectangle
    source_rectangle: Rectangle
    start_row: int
    end_row: int

    @property
    def start_x(self) -> int:
        return self.source_rectangle.x

    @property
    def end_x(self) -> int:
        return self.source_rectangle.right

    @property
    def scan_rows(self) -> range:
        """Rows in ``[start_row, end_row)`` that fall inside the source band."""
        start = max(self.start_row, self.source_rectangle.y)
        stop = min(self.end_row, self.source_rectangle.bottom)
        return range(start, max(start, stop))


def partition_rows(start: int, stop: int, chunks: int) -> list[tuple[int, int]]:
    """
    Split ``[start, stop)`` into at most ``chunks`` contiguous half-open ranges.

    Args:
        start: First row (inclusive)
        stop: Last row (exclusive)
        chunks: Desired number of chunks (usually the worker count)

    Returns:
        Ordered, non-overlapping ``(lo, hi)`` pairs covering every row once

    Example:
        >>> partition_rows(0, 10, 4)
        [(0, 3), (3, 6), (6, 9), (9, 10)]
    """
    total = stop - start
    if total <= 0:
        return []
    chunks = max(MIN_WORKERS, min(chunks, total))
    size = -(-total // chunks)
    return [(lo, min(lo + size, stop)) for lo in range(start, stop, size)]


def _resolve_transform(transform: Any) -> PixelFunction:
    if isinstance(transform, PixelTransform):
        return transform.apply_pixel
    if callable(transform):
        return transform
    raise TypeError(
        f"transform must be callable or provide apply_pixel(color), got {type(transform).__name__}"
    )


def _resolve_progress(on_row_processed: Any) -> RowCallback | None:
    if on_row_processed is None:
        return None
    if isinstance(on_row_processed, ProgressSink):
        return on_row_processed.row_processed
    if callable(on_row_processed):
        return on_row_processed
    raise TypeError(
        "on_row_processed must be callable or provide row_processed(y), "
        f"got {type(on_row_processed).__name__}"
    )


class ParallelRegionProcessor:
    """
    Row-parallel executor for per-pixel transforms.

    Workers are threads. Per-pixel Python callables are serialized by the GIL,
    so real speedups come from ``row_transform`` callables that release it
    (Numba ``nogil`` kernels, large NumPy operations).
    """

    __slots__ = ("max_workers",)

    @validate_type(numbers.Integral, "max_workers", allow_none=True)
    @validate_positive("max_workers")
    def __init__(self, max_workers: int | None = DEFAULT_MAX_WORKERS):
        """
        Initialize the processor.

        Args:
            max_workers: Upper bound on worker threads (None = CPU count,
                1 = run inline on the calling thread)

        Raises:
            TypeError: If max_workers is not an integer or None
            ValueError: If max_workers is not positive
        """
        self.max_workers = max_workers

    @property
    def worker_count(self) -> int:
        return self.max_workers or os.cpu_count() or MIN_WORKERS

    def apply(
        self,
        target: BufferProvider,
        source: BufferProvider,
        target_rectangle: Rectangle,
        source_rectangle: Rectangle,
        start_row: int,
        end_row: int,
        transform: PixelFunction | PixelTransform,
        on_row_processed: RowCallback | ProgressSink | None = None,
        row_transform: RowFunction | None = None,
    ) -> int:
        """
        Transform ``source`` into ``target`` over the scanned region.

        Args:
            target: Buffer to write
            source: Buffer to read
            target_rectangle: Nominal target region (carried in the job)
            source_rectangle: Region to scan; columns ``[x, right)`` of rows
                ``[y, bottom)``
            start_row: First target row in scope
            end_row: Row after the last one in scope
            transform: ``Color -> Color`` callable or ``PixelTransform``
            on_row_processed: Called with ``y`` after each completed row
            row_transform: Optional ``(source_row, target_row) -> None``
                used instead of the per-pixel loop; rows are [N, 4] views

        Returns:
            Number of rows processed

        Raises:
            ArgumentRangeError: If the row span is not
                ``0 <= start_row <= end_row <= target.height``
            ResourceAcquisitionError: If a buffer is already locked
            BoundsViolationError: If the scan reaches outside a buffer
        """
        must_be_in_range(start_row, 0, target.height, "start_row")
        must_be_in_range(end_row, start_row, target.height, "end_row")

        job = ProcessingJob(
            target=target,
            source=source,
            target_rectangle=target_rectangle,
            source_rectangle=source_rectangle,
            start_row=start_row,
            end_row=end_row,
        )
        return self.run(job, transform, on_row_processed, row_transform)

    def run(
        self,
        job: ProcessingJob,
        transform: PixelFunction | PixelTransform,
        on_row_processed: RowCallback | ProgressSink | None = None,
        row_transform: RowFunction | None = None,
    ) -> int:
        """Execute a prepared job (see :meth:`apply`)."""
        pixel_fn = _resolve_transform(transform)
        progress = _resolve_progress(on_row_processed)
        rows = job.scan_rows
        start_x, end_x = job.start_x, job.end_x

        with ExitStack() as stack:
            source_pixels = stack.enter_context(job.source.lock())
            if job.target is job.source:
                target_pixels = source_pixels
            else:
                target_pixels = stack.enter_context(job.target.lock())

            if row_transform is not None:

                def process_row(y: int) -> None:
                    row_transform(
                        source_pixels.row(y, start_x, end_x),
                        target_pixels.row(y, start_x, end_x),
                    )

            else:

                def process_row(y: int) -> None:
                    for x in range(start_x, end_x):
                        target_pixels[x, y] = pixel_fn(source_pixels[x, y])

            def run_chunk(lo: int, hi: int) -> None:
                for y in range(lo, hi):
                    process_row(y)
                    if progress is not None:
                        progress(y)

            chunks = partition_rows(rows.start, rows.stop, self.worker_count)
            logger.debug(
                "[ParallelRegionProcessor] %d rows x %d columns in %d chunk(s)",
                len(rows),
                max(0, end_x - start_x),
                len(chunks),
            )

            if len(chunks) <= 1:
                for lo, hi in chunks:
                    run_chunk(lo, hi)
            else:
                with ThreadPoolExecutor(
                    max_workers=len(chunks), thread_name_prefix="pixpro-rows"
                ) as pool:
                    futures = [pool.submit(run_chunk, lo, hi) for lo, hi in chunks]
                    wait(futures)

                try:
                    for future in futures:
                        future.result()
                except Exception:
                    logger.debug(
                        "[ParallelRegionProcessor] Worker failed; releasing accessors",
                        exc_info=True,
                    )
                    raise

        return len(rows)
