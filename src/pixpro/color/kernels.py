"""
Numba-optimized kernels for per-row color processing.

Row kernels handle one row span of RGBA pixels [N, 4] and build on the scalar
transfer curves below. Everything is compiled with ``nogil=True`` so the row
workers in ``ParallelRegionProcessor`` run them truly concurrently. ``fastmath`` stays off: the transfer curves must match
the scalar path in ``pixpro.color.space``.
"""

import numpy as np
from numba import njit

from pixpro.constants import (
    SRGB_ENCODED_THRESHOLD,
    SRGB_GAMMA,
    SRGB_LINEAR_SLOPE,
    SRGB_LINEAR_THRESHOLD,
    SRGB_OFFSET,
    SRGB_SCALE,
)

# ============================================================================
# Transfer Curves
# ============================================================================


@njit(cache=True, nogil=True)
def expand_channel_numba(v: float) -> float:
    """sRGB EOTF for a single channel value."""
    if v <= SRGB_ENCODED_THRESHOLD:
        return v / SRGB_LINEAR_SLOPE
    return ((v + SRGB_OFFSET) / SRGB_SCALE) ** SRGB_GAMMA


@njit(cache=True, nogil=True)
def compress_channel_numba(v: float) -> float:
    """sRGB OETF for a single channel value, clamped to [0, 1]."""
    if v <= SRGB_LINEAR_THRESHOLD:
        e = v * SRGB_LINEAR_SLOPE
    else:
        e = SRGB_SCALE * v ** (1.0 / SRGB_GAMMA) - SRGB_OFFSET
    return min(max(e, 0.0), 1.0)


# ============================================================================
# Row Kernels
# ============================================================================


@njit(cache=True, nogil=True)
def brightness_row_numba(pixels: np.ndarray, delta: float, out: np.ndarray) -> None:
    """
    Fused expand + offset + compress for one row.

    Reads each pixel once and writes it once, so ``out`` may alias ``pixels``
    for in-place processing.

    Args:
        pixels: Encoded pixels [N, 4]
        delta: Linear offset added to R, G, B (brightness / 100)
        out: Output buffer [N, 4]
    """
    N = pixels.shape[0]
    for i in range(N):
        r = expand_channel_numba(pixels[i, 0]) + delta
        g = expand_channel_numba(pixels[i, 1]) + delta
        b = expand_channel_numba(pixels[i, 2]) + delta
        a = pixels[i, 3]

        out[i, 0] = compress_channel_numba(r)
        out[i, 1] = compress_channel_numba(g)
        out[i, 2] = compress_channel_numba(b)
        out[i, 3] = a
