"""
pixpro - Parallel Pixel Processing

Region-scoped, row-parallel per-pixel color operations on RGBA buffers.

Features:
- Generic parallel region processor: clipping, scoped buffer locking,
  contiguous row partitioning across worker threads, per-row progress
- Encoded (sRGB) <-> linear colorspace conversion around every operation
- Pluggable pixel operations via ImageProcessor / FunctionProcessor
- Brightness adjustment with a Numba nogil row kernel
- Typed error taxonomy (ArgumentRangeError, BoundsViolationError,
  ResourceAcquisitionError)

Example - Processor:
    >>> from pixpro import BrightnessProcessor, PixelBuffer, Rectangle
    >>>
    >>> source = PixelBuffer.from_array(image)  # [H, W, 3|4], float or uint8
    >>> target = source.copy()
    >>>
    >>> BrightnessProcessor(40).process(target, source, Rectangle(10, 10, 64, 64))

Example - Functional:
    >>> from pixpro import adjust_brightness
    >>>
    >>> brighter = adjust_brightness(source, 40, inplace=False)

Example - Custom operation:
    >>> from pixpro import Color, FunctionProcessor
    >>>
    >>> invert = FunctionProcessor(lambda c: Color(1 - c.r, 1 - c.g, 1 - c.b, c.a))
    >>> invert.process(target)
"""

__version__ = "0.1.0"

# Pixel storage
from pixpro.buffer import PixelAccessor, PixelBuffer

# Color values and conversion
from pixpro.color.space import (
    Color,
    LinearColor,
    compress,
    compress_array,
    expand,
    expand_array,
)

# Errors
from pixpro.errors import (
    ArgumentRangeError,
    BoundsViolationError,
    PixproError,
    ResourceAcquisitionError,
)

# Geometry
from pixpro.geometry import Rectangle, intersect

# Processing
from pixpro.processing.base import FunctionProcessor, ImageProcessor, ProgressEvent
from pixpro.processing.brightness import BrightnessProcessor, adjust_brightness
from pixpro.processing.parallel import ParallelRegionProcessor, ProcessingJob, partition_rows

# Protocols
from pixpro.protocols import BufferProvider, PixelTransform, ProgressSink

# Validation
from pixpro.validators import must_be_in_range

__all__ = [
    # Version
    "__version__",
    # Storage
    "PixelBuffer",
    "PixelAccessor",
    # Color
    "Color",
    "LinearColor",
    "expand",
    "compress",
    "expand_array",
    "compress_array",
    # Geometry
    "Rectangle",
    "intersect",
    # Processing
    "ParallelRegionProcessor",
    "ProcessingJob",
    "partition_rows",
    "ImageProcessor",
    "FunctionProcessor",
    "ProgressEvent",
    "BrightnessProcessor",
    "adjust_brightness",
    # Protocols
    "BufferProvider",
    "PixelTransform",
    "ProgressSink",
    # Errors
    "PixproError",
    "ArgumentRangeError",
    "BoundsViolationError",
    "ResourceAcquisitionError",
    # Validation
    "must_be_in_range",
]
