"""
Pixel buffer storage and scoped accessors.

A ``PixelBuffer`` owns a float32 RGBA array [height, width, 4]. Pixel access
goes through ``PixelBuffer.lock()``, which hands out a ``PixelAccessor`` that
is released deterministically (context manager, idempotent ``release()``).

Example:
    >>> buffer = PixelBuffer.filled(4, 4, Color(0.2, 0.4, 0.6))
    >>> with buffer.lock() as pixels:
    ...     pixels[1, 2] = Color(1.0, 0.0, 0.0)
    ...     pixels[1, 2].r
    1.0
"""

from __future__ import annotations

import logging
import threading

import numpy as np

from pixpro.color.space import Color
from pixpro.constants import CHANNELS, COLOR_CHANNELS, PIXEL_DTYPE, UINT8_MAX
from pixpro.errors import BoundsViolationError, ResourceAcquisitionError
from pixpro.geometry import Rectangle
from pixpro.validators import must_be_in_range

logger = logging.getLogger(__name__)

_MAX_EXTENT = 1 << 31


class PixelBuffer:
    """
    2D grid of RGBA colors with exclusive, scoped locking.

    Attributes:
        width: Number of columns
        height: Number of rows
    """

    __slots__ = ("width", "height", "_pixels", "_lock")

    def __init__(self, width: int, height: int, pixels: np.ndarray | None = None):
        """
        Initialize the buffer.

        Args:
            width: Number of columns (>= 0)
            height: Number of rows (>= 0)
            pixels: Optional float32 array [height, width, 4] to adopt without
                copying. Defaults to transparent black.

        Raises:
            ArgumentRangeError: If width or height is negative
            ValueError: If pixels has the wrong shape or dtype
        """
        must_be_in_range(width, 0, _MAX_EXTENT, "width")
        must_be_in_range(height, 0, _MAX_EXTENT, "height")

        if pixels is None:
            pixels = np.zeros((height, width, CHANNELS), dtype=PIXEL_DTYPE)
        elif pixels.shape != (height, width, CHANNELS):
            raise ValueError(
                f"pixels must be [{height}, {width}, {CHANNELS}], got shape {pixels.shape}"
            )
        elif pixels.dtype != PIXEL_DTYPE:
            raise ValueError(
                f"pixels must be {np.dtype(PIXEL_DTYPE).name}, got {pixels.dtype}. "
                f"Use PixelBuffer.from_array() to convert."
            )

        self.width = int(width)
        self.height = int(height)
        self._pixels = pixels
        self._lock = threading.Lock()

    @classmethod
    def filled(cls, width: int, height: int, color: Color) -> PixelBuffer:
        """Create a buffer with every pixel set to ``color``."""
        buffer = cls(width, height)
        buffer._pixels[...] = color.to_tuple()
        return buffer

    @classmethod
    def from_array(cls, array: np.ndarray) -> PixelBuffer:
        """
        Create a buffer from an image array (copied).

        Args:
            array: [H, W, 3] or [H, W, 4] array. Float input must already be
                normalized to [0, 1]; uint8 input is divided by 255. RGB input
                gets an opaque alpha channel.

        Returns:
            New PixelBuffer owning a float32 copy of the data
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (COLOR_CHANNELS, CHANNELS):
            raise ValueError(f"array must be [H, W, 3] or [H, W, 4], got shape {array.shape}")

        if array.dtype == np.uint8:
            data = array.astype(PIXEL_DTYPE) / UINT8_MAX
        else:
            data = array.astype(PIXEL_DTYPE, copy=True)

        height, width = data.shape[:2]
        if data.shape[2] == COLOR_CHANNELS:
            alpha = np.ones((height, width, 1), dtype=PIXEL_DTYPE)
            data = np.concatenate([data, alpha], axis=2)

        return cls(width, height, np.ascontiguousarray(data))

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def bounds(self) -> Rectangle:
        """Full extent of the buffer as a rectangle at the origin."""
        return Rectangle(0, 0, self.width, self.height)

    @property
    def is_locked(self) -> bool:
        return self._lock.locked()

    # ========================================================================
    # Locking
    # ========================================================================

    def lock(self) -> PixelAccessor:
        """
        Acquire exclusive access to the pixel data.

        Returns:
            Accessor to use as a context manager (or release explicitly)

        Raises:
            ResourceAcquisitionError: If the buffer is already locked
        """
        if not self._lock.acquire(blocking=False):
            raise ResourceAcquisitionError(
                f"PixelBuffer {self.width}x{self.height} is already locked. "
                f"Release the existing accessor before locking again."
            )
        return PixelAccessor(self, self._pixels)

    def _release(self) -> None:
        self._lock.release()

    # ========================================================================
    # Copies
    # ========================================================================

    def copy(self) -> PixelBuffer:
        return PixelBuffer(self.width, self.height, self._pixels.copy())

    def to_array(self) -> np.ndarray:
        """Copy of the pixel data [height, width, 4]."""
        return self._pixels.copy()

    def __repr__(self) -> str:
        state = "locked" if self.is_locked else "unlocked"
        return f"PixelBuffer(width={self.width}, height={self.height}, {state})"


class PixelAccessor:
    """
    Bounds-checked read/write view over a locked ``PixelBuffer``.

    Indexing is ``accessor[x, y]``. Safe for concurrent reads and for
    concurrent writes to distinct cells; it takes no per-cell locks.
    """

    __slots__ = ("width", "height", "_buffer", "_pixels", "_released")

    def __init__(self, buffer: PixelBuffer, pixels: np.ndarray):
        self.width = buffer.width
        self.height = buffer.height
        self._buffer = buffer
        self._pixels = pixels
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def _check(self, x: int, y: int) -> None:
        if self._released:
            raise ResourceAcquisitionError("PixelAccessor used after release")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise BoundsViolationError(x, y, self.width, self.height)

    def __getitem__(self, xy: tuple[int, int]) -> Color:
        x, y = xy
        self._check(x, y)
        r, g, b, a = self._pixels[y, x].tolist()
        return Color(r, g, b, a)

    def __setitem__(self, xy: tuple[int, int], color: Color) -> None:
        x, y = xy
        self._check(x, y)
        self._pixels[y, x] = (color.r, color.g, color.b, color.a)

    def row(self, y: int, start_x: int, end_x: int) -> np.ndarray:
        """
        Writable view of pixels ``[start_x, end_x)`` on row ``y``.

        Args:
            y: Row index
            start_x: First column (inclusive)
            end_x: Last column (exclusive)

        Returns:
            View [end_x - start_x, 4] into the buffer storage

        Raises:
            BoundsViolationError: If any part of the span is outside the buffer
        """
        if start_x < end_x:
            self._check(start_x, y)
            self._check(end_x - 1, y)
        elif self._released:
            raise ResourceAcquisitionError("PixelAccessor used after release")
        elif not 0 <= y < self.height:
            raise BoundsViolationError(start_x, y, self.width, self.height)
        return self._pixels[y, start_x:end_x]

    def release(self) -> None:
        """Release the buffer lock. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        self._buffer._release()
        logger.debug("[PixelAccessor] Released %dx%d buffer", self.width, self.height)

    def __enter__(self) -> PixelAccessor:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
