"""
Base class for pixel operations built on the parallel region processor.

Subclasses only describe the math of one pixel (``apply_pixel``) and,
optionally, a vectorized row kernel (``apply_row``). Clipping, locking,
row dispatch and progress reporting are inherited.

Example:
    >>> class Invert(ImageProcessor):
    ...     def apply_pixel(self, color):
    ...         return Color(1 - color.r, 1 - color.g, 1 - color.b, color.a)
    >>>
    >>> Invert().add_progress_listener(print).process(buffer)
"""

from __future__ import annotations

import logging
import sys
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

# Python 3.10 compatibility: Self was added in Python 3.11
if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

import numpy as np

from pixpro.buffer import PixelBuffer
from pixpro.color.space import Color
from pixpro.constants import DEFAULT_MAX_WORKERS
from pixpro.geometry import Rectangle, intersect
from pixpro.processing.parallel import ParallelRegionProcessor, ProcessingJob

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressEvent:
    """
    Progress notification emitted after each processed row.

    Attributes:
        row: Row that just completed
        rows_processed: Rows completed so far in the current call
        total_rows: Rows the current call will process
    """

    row: int
    rows_processed: int
    total_rows: int

    @property
    def fraction(self) -> float:
        if self.total_rows == 0:
            return 1.0
        return self.rows_processed / self.total_rows


ProgressCallback = Callable[[ProgressEvent], None]


class ImageProcessor(ABC):
    """
    Strategy base for per-pixel image operations.

    Calls on one instance must not overlap; the progress counters are per
    instance.
    """

    def __init__(self, max_workers: int | None = DEFAULT_MAX_WORKERS, vectorized: bool = True):
        """
        Initialize the processor.

        Args:
            max_workers: Worker thread limit (None = CPU count)
            vectorized: Use ``apply_row`` when the subclass provides one
        """
        self._engine = ParallelRegionProcessor(max_workers)
        self.vectorized = vectorized
        self._listeners: list[ProgressCallback] = []
        self._progress_lock = threading.Lock()
        self._rows_processed = 0
        self._total_rows = 0

    # ========================================================================
    # Strategy hooks
    # ========================================================================

    @abstractmethod
    def apply_pixel(self, color: Color) -> Color:
        """Transform one encoded source pixel into the encoded target pixel."""

    def _row_kernel(self) -> Callable[[np.ndarray, np.ndarray], None] | None:
        if not self.vectorized:
            return None
        return getattr(self, "apply_row", None)

    # ========================================================================
    # Progress
    # ========================================================================

    @property
    def max_workers(self) -> int | None:
        return self._engine.max_workers

    @property
    def rows_processed(self) -> int:
        return self._rows_processed

    @property
    def total_rows(self) -> int:
        return self._total_rows

    def add_progress_listener(self, callback: ProgressCallback) -> Self:
        """
        Register a callback receiving a ``ProgressEvent`` per processed row.

        Callbacks run on worker threads.

        Returns:
            Self for method chaining
        """
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        self._listeners.append(callback)
        return self

    def remove_progress_listener(self, callback: ProgressCallback) -> Self:
        self._listeners.remove(callback)
        return self

    def _on_row_processed(self, y: int) -> None:
        with self._progress_lock:
            self._rows_processed += 1
            event = ProgressEvent(y, self._rows_processed, self._total_rows)
        for callback in self._listeners:
            callback(event)

    # ========================================================================
    # Execution
    # ========================================================================

    def apply(
        self,
        target: PixelBuffer,
        source: PixelBuffer,
        target_rectangle: Rectangle,
        source_rectangle: Rectangle,
        start_row: int,
        end_row: int,
    ) -> int:
        """
        Run this operation over an explicit region and row span.

        Rectangles are used as given; use :meth:`process` for clipping.

        Returns:
            Number of rows processed
        """
        rows = ProcessingJob(
            target, source, target_rectangle, source_rectangle, start_row, end_row
        ).scan_rows
        with self._progress_lock:
            self._rows_processed = 0
            self._total_rows = len(rows)

        return self._engine.apply(
            target,
            source,
            target_rectangle,
            source_rectangle,
            start_row,
            end_row,
            self.apply_pixel,
            self._on_row_processed,
            self._row_kernel(),
        )

    def process(
        self,
        target: PixelBuffer,
        source: PixelBuffer | None = None,
        rectangle: Rectangle | None = None,
    ) -> PixelBuffer:
        """
        Apply the operation to ``rectangle``, clipped to both buffers.

        Args:
            target: Buffer to write
            source: Buffer to read (default: ``target``, i.e. in-place)
            rectangle: Region to process (default: the whole source)

        Returns:
            The target buffer
        """
        if source is None:
            source = target
        requested = source.bounds if rectangle is None else rectangle
        region = intersect(intersect(requested, source.bounds), target.bounds)

        if region.is_empty:
            logger.info(
                "[%s] Region %s does not overlap the buffers, nothing to do",
                type(self).__name__,
                requested,
            )
            return target

        rows = self.apply(target, source, region, region, 0, target.height)
        logger.info(
            "[%s] Processed %d rows x %d columns",
            type(self).__name__,
            rows,
            region.width,
        )
        return target


class FunctionProcessor(ImageProcessor):
    """
    Adapter turning any ``Color -> Color`` callable into an ``ImageProcessor``.

    Example:
        >>> grey = FunctionProcessor(lambda c: Color(c.g, c.g, c.g, c.a))
        >>> grey.process(buffer)
    """

    def __init__(
        self,
        function: Callable[[Color], Color],
        max_workers: int | None = DEFAULT_MAX_WORKERS,
    ):
        if not callable(function):
            raise TypeError(f"function must be callable, got {type(function).__name__}")
        super().__init__(max_workers=max_workers, vectorized=False)
        self.function = function

    def apply_pixel(self, color: Color) -> Color:
        return self.function(color)

    def __repr__(self) -> str:
        name = getattr(self.function, "__name__", type(self.function).__name__)
        return f"FunctionProcessor({name})"
