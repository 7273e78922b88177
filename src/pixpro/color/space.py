"""
Color values and encoded/linear colorspace conversion.

Colors are stored encoded (sRGB transfer curve, IEC 61966-2-1) with every
channel normalized to [0, 1]. Arithmetic such as brightness offsets happens in
linear space:

    encoded --expand--> linear --(math)--> linear --compress--> encoded

``compress`` clamps to [0, 1], so any overshoot from the math saturates the
same way standard image clipping does.

Example:
    >>> c = Color(0.5, 0.25, 1.0, 0.8)
    >>> linear = expand(c)
    >>> back = compress(linear, c.a)
    >>> abs(back.r - c.r) < 1e-6
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from pixpro.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    COLOR_CHANNELS,
    SRGB_ENCODED_THRESHOLD,
    SRGB_GAMMA,
    SRGB_LINEAR_SLOPE,
    SRGB_LINEAR_THRESHOLD,
    SRGB_OFFSET,
    SRGB_SCALE,
)


@dataclass(frozen=True)
class Color:
    """
    Encoded RGBA color with channels in [0, 1].

    Attributes:
        r: Red channel
        g: Green channel
        b: Blue channel
        a: Alpha channel (never gamma-converted)
    """

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_vector3(self) -> np.ndarray:
        """RGB channels as a float64 vector [3] (alpha dropped)."""
        return np.array((self.r, self.g, self.b), dtype=np.float64)

    @classmethod
    def from_vector3(cls, vector: np.ndarray, alpha: float = 1.0) -> Color:
        r, g, b = (float(v) for v in vector)
        return cls(r, g, b, float(alpha))

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)


@dataclass(frozen=True)
class LinearColor:
    """
    Linear-light RGB triple produced by :func:`expand`.

    Values are unbounded so intermediate arithmetic may overshoot [0, 1];
    :func:`compress` clamps on the way back.
    """

    r: float
    g: float
    b: float

    def to_vector3(self) -> np.ndarray:
        return np.array((self.r, self.g, self.b), dtype=np.float64)

    @classmethod
    def from_vector3(cls, vector: np.ndarray) -> LinearColor:
        r, g, b = (float(v) for v in vector)
        return cls(r, g, b)


# ============================================================================
# Scalar transfer curves
# ============================================================================


def expand_channel(value: float) -> float:
    """sRGB EOTF: encoded channel -> linear channel."""
    if value <= SRGB_ENCODED_THRESHOLD:
        return value / SRGB_LINEAR_SLOPE
    return math.pow((value + SRGB_OFFSET) / SRGB_SCALE, SRGB_GAMMA)


def compress_channel(value: float) -> float:
    """sRGB OETF: linear channel -> encoded channel, clamped to [0, 1]."""
    if value <= SRGB_LINEAR_THRESHOLD:
        encoded = value * SRGB_LINEAR_SLOPE
    else:
        encoded = SRGB_SCALE * math.pow(value, 1.0 / SRGB_GAMMA) - SRGB_OFFSET
    return min(max(encoded, CHANNEL_MIN), CHANNEL_MAX)


def expand(color: Color) -> LinearColor:
    """
    Convert an encoded color to linear space.

    Args:
        color: Encoded color

    Returns:
        Linear RGB (alpha is not part of the linear form)
    """
    return LinearColor(
        expand_channel(color.r),
        expand_channel(color.g),
        expand_channel(color.b),
    )


def compress(linear: LinearColor, alpha: float = 1.0) -> Color:
    """
    Convert a linear color back to encoded space.

    Args:
        linear: Linear RGB, possibly outside [0, 1] after arithmetic
        alpha: Alpha to attach unchanged

    Returns:
        Encoded color with RGB clamped to [0, 1]
    """
    return Color(
        compress_channel(linear.r),
        compress_channel(linear.g),
        compress_channel(linear.b),
        alpha,
    )


# ============================================================================
# Array transfer curves (NumPy)
# ============================================================================


def expand_array(pixels: np.ndarray) -> np.ndarray:
    """
    Vectorized :func:`expand` for pixel arrays.

    Args:
        pixels: Encoded pixels [..., 3] or [..., 4]

    Returns:
        Float64 array of the same shape; RGB linearized, alpha copied
    """
    pixels = np.asarray(pixels, dtype=np.float64)
    out = pixels.copy()
    rgb = pixels[..., :COLOR_CHANNELS]
    out[..., :COLOR_CHANNELS] = np.where(
        rgb <= SRGB_ENCODED_THRESHOLD,
        rgb / SRGB_LINEAR_SLOPE,
        np.power((np.maximum(rgb, SRGB_ENCODED_THRESHOLD) + SRGB_OFFSET) / SRGB_SCALE, SRGB_GAMMA),
    )
    return out


def compress_array(linear: np.ndarray) -> np.ndarray:
    """
    Vectorized :func:`compress` for pixel arrays.

    Args:
        linear: Linear pixels [..., 3] or [..., 4] (alpha copied unchanged)

    Returns:
        Float64 array of the same shape; RGB encoded and clamped to [0, 1]
    """
    linear = np.asarray(linear, dtype=np.float64)
    out = linear.copy()
    rgb = linear[..., :COLOR_CHANNELS]
    # np.maximum keeps the discarded branch of np.where free of NaNs
    encoded = np.where(
        rgb <= SRGB_LINEAR_THRESHOLD,
        rgb * SRGB_LINEAR_SLOPE,
        SRGB_SCALE * np.power(np.maximum(rgb, SRGB_LINEAR_THRESHOLD), 1.0 / SRGB_GAMMA)
        - SRGB_OFFSET,
    )
    out[..., :COLOR_CHANNELS] = np.clip(encoded, CHANNEL_MIN, CHANNEL_MAX)
    return out
