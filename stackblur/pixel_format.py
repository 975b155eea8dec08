"""
Pixel formats accepted by the blur.

StackBlur works on 8-bit channels only:
- RGB8: uint8 (0-255), 3 channels (treated as fully opaque)
- RGBA8: uint8 (0-255), 4 channels, straight (non-premultiplied) alpha
"""

from enum import Enum

import numpy as np


class PixelFormat(Enum):
    """Pixel format for images."""
    RGB8 = "RGB8"      # uint8, 3 channels
    RGBA8 = "RGBA8"    # uint8, 4 channels

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "PixelFormat":
        """Detect pixel format from numpy array."""
        if arr.ndim != 3:
            raise ValueError(f"Expected 3D array, got {arr.ndim}D")

        if arr.dtype != np.uint8:
            raise ValueError(f"Unsupported dtype: {arr.dtype}")

        channels = arr.shape[2]
        if channels == 4:
            return cls.RGBA8
        elif channels == 3:
            return cls.RGB8
        else:
            raise ValueError(f"Unsupported channel count: {channels}")

    @property
    def has_alpha(self) -> bool:
        return self is PixelFormat.RGBA8

    @property
    def channels(self) -> int:
        return 4 if self.has_alpha else 3
