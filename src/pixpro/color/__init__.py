"""
Color module.

Provides the encoded/linear color value types and the sRGB transfer curves
used around every pixel operation.
"""

from pixpro.color.space import (
    Color,
    LinearColor,
    compress,
    compress_array,
    compress_channel,
    expand,
    expand_array,
    expand_channel,
)

__all__ = [
    "Color",
    "LinearColor",
    "expand",
    "compress",
    "expand_channel",
    "compress_channel",
    "expand_array",
    "compress_array",
]
