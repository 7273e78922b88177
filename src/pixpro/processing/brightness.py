"""
Brightness adjustment in linear light.

Adds ``brightness / 100`` to every linear RGB channel, then clamps back into
encoded range. Alpha is untouched.

Example:
    >>> from pixpro import BrightnessProcessor, PixelBuffer
    >>> BrightnessProcessor(25).process(buffer)           # in-place
    >>> brighter = adjust_brightness(buffer, 25, inplace=False)
"""

from __future__ import annotations

import logging
import numbers

import numpy as np

from pixpro.buffer import PixelBuffer
from pixpro.color.kernels import brightness_row_numba
from pixpro.color.space import Color, LinearColor, compress, expand
from pixpro.constants import (
    BRIGHTNESS_MAX,
    BRIGHTNESS_MIN,
    BRIGHTNESS_SCALE,
    DEFAULT_BRIGHTNESS,
    DEFAULT_MAX_WORKERS,
)
from pixpro.geometry import Rectangle
from pixpro.processing.base import ImageProcessor, ProgressCallback
from pixpro.validators import validate_range, validate_type

logger = logging.getLogger(__name__)


class BrightnessProcessor(ImageProcessor):
    """
    Shift brightness by a constant offset in linear space.

    Attributes:
        value: Brightness in [-100, 100] (0 = no change)
    """

    @validate_type(numbers.Integral, "brightness")
    @validate_range(BRIGHTNESS_MIN, BRIGHTNESS_MAX, "brightness")
    def __init__(
        self,
        brightness: int = DEFAULT_BRIGHTNESS,
        max_workers: int | None = DEFAULT_MAX_WORKERS,
        vectorized: bool = True,
    ):
        """
        Initialize the processor.

        Args:
            brightness: Integer in [-100, 100]; 100 adds 1.0 to every linear channel
            max_workers: Worker thread limit (None = CPU count)
            vectorized: Use the Numba row kernel instead of the per-pixel path

        Raises:
            TypeError: If brightness is not an integer
            ArgumentRangeError: If brightness is outside [-100, 100]
        """
        super().__init__(max_workers=max_workers, vectorized=vectorized)
        self.value = int(brightness)
        self._delta = self.value / BRIGHTNESS_SCALE

        logger.info("[BrightnessProcessor] Initialized with brightness=%d", self.value)

    @property
    def delta(self) -> float:
        """Linear offset added to each RGB channel."""
        return self._delta

    def apply_pixel(self, color: Color) -> Color:
        vector = expand(color).to_vector3() + self._delta
        return compress(LinearColor.from_vector3(vector), color.a)

    def apply_row(self, source_row: np.ndarray, target_row: np.ndarray) -> None:
        brightness_row_numba(source_row, self._delta, target_row)

    def __repr__(self) -> str:
        return f"BrightnessProcessor(brightness={self.value})"


def adjust_brightness(
    buffer: PixelBuffer,
    value: int,
    rectangle: Rectangle | None = None,
    inplace: bool = True,
    max_workers: int | None = DEFAULT_MAX_WORKERS,
    progress: ProgressCallback | None = None,
) -> PixelBuffer:
    """
    Adjust brightness of a buffer region.

    Args:
        buffer: Source pixels
        value: Brightness in [-100, 100]
        rectangle: Region to adjust (default: whole buffer); clipped to bounds
        inplace: If True, modifies ``buffer`` directly; otherwise pixels
            outside the region are copied unchanged into a new buffer
        max_workers: Worker thread limit (None = CPU count)
        progress: Optional callback receiving a ``ProgressEvent`` per row

    Returns:
        Adjusted buffer

    Example:
        >>> # Darken the top half, keep the original
        >>> top = Rectangle(0, 0, buffer.width, buffer.height // 2)
        >>> darker = adjust_brightness(buffer, -30, rectangle=top, inplace=False)
    """
    processor = BrightnessProcessor(value, max_workers=max_workers)
    if progress is not None:
        processor.add_progress_listener(progress)

    target = buffer if inplace else buffer.copy()
    return processor.process(target, buffer, rectangle)
