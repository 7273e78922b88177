"""
Exception hierarchy for pixpro.

Each error also derives from the closest builtin so callers can catch
``ValueError`` / ``IndexError`` / ``RuntimeError`` without importing pixpro.
"""

from __future__ import annotations


class PixproError(Exception):
    """Base class for all pixpro errors."""


class ArgumentRangeError(PixproError, ValueError):
    """A parameter lies outside its documented inclusive bounds."""

    def __init__(
        self,
        param_name: str,
        value: float,
        min_val: float,
        max_val: float,
        suggestion: str = "",
    ):
        self.param_name = param_name
        self.value = value
        self.min_val = min_val
        self.max_val = max_val
        super().__init__(
            f"{param_name}={value} is outside valid range [{min_val}, {max_val}].{suggestion}"
        )


class BoundsViolationError(PixproError, IndexError):
    """A pixel coordinate falls outside a buffer's extent."""

    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"Pixel ({x}, {y}) is outside buffer bounds {width}x{height}. "
            f"Valid coordinates are x in [0, {width}) and y in [0, {height})."
        )


class ResourceAcquisitionError(PixproError, RuntimeError):
    """A pixel buffer could not be locked, or a released accessor was used."""
