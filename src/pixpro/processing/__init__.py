"""
Processing module.

Provides the row-parallel region processor, the processor strategy base and
the brightness operation.
"""

from pixpro.processing.base import FunctionProcessor, ImageProcessor, ProgressEvent
from pixpro.processing.brightness import BrightnessProcessor, adjust_brightness
from pixpro.processing.parallel import ParallelRegionProcessor, ProcessingJob, partition_rows

__all__ = [
    "ParallelRegionProcessor",
    "ProcessingJob",
    "partition_rows",
    "ImageProcessor",
    "FunctionProcessor",
    "ProgressEvent",
    "BrightnessProcessor",
    "adjust_brightness",
]
