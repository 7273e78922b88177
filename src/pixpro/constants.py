"""
Constants and default values for pixpro processors.

Centralizes magic numbers and configuration defaults for better maintainability.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Pixel Storage Constants
# =============================================================================

CHANNELS = 4  # R, G, B, A
COLOR_CHANNELS = 3  # R, G, B (alpha excluded from linear arithmetic)
PIXEL_DTYPE = np.float32  # Normalized [0, 1] storage per channel
UINT8_MAX = 255.0  # Scale for 8-bit input arrays

CHANNEL_MIN = 0.0
CHANNEL_MAX = 1.0

# =============================================================================
# sRGB Transfer Curve (IEC 61966-2-1)
# =============================================================================

SRGB_ENCODED_THRESHOLD = 0.04045  # Encoded value where the linear segment ends
SRGB_LINEAR_THRESHOLD = 0.0031308  # Linear value where the linear segment ends
SRGB_LINEAR_SLOPE = 12.92
SRGB_OFFSET = 0.055
SRGB_SCALE = 1.055
SRGB_GAMMA = 2.4

# =============================================================================
# Brightness Constants
# =============================================================================

DEFAULT_BRIGHTNESS = 0  # No change
BRIGHTNESS_MIN = -100  # Shift every linear channel by -1.0
BRIGHTNESS_MAX = 100  # Shift every linear channel by +1.0
BRIGHTNESS_SCALE = 100.0  # brightness / scale = linear offset

# =============================================================================
# Parallel Dispatch Constants
# =============================================================================

DEFAULT_MAX_WORKERS = None  # None = os.cpu_count()
MIN_WORKERS = 1
