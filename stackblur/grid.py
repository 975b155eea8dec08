"""
Pixel grid accessor.

A :class:`PixelGrid` is a mutable ``width x height`` raster of RGBA pixels with
8 bits per channel and straight alpha, stored as a ``(height, width, 4)`` uint8
numpy array. Reads outside the grid clamp to the nearest edge pixel, which is
what the blur relies on at the image borders.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import numpy as np

from .pixel_format import PixelFormat

if TYPE_CHECKING:
    from PIL import Image as PILImage


class Pixel(NamedTuple):
    """A single straight-alpha RGBA pixel, 0-255 per channel."""
    r: int
    g: int
    b: int
    a: int


class PixelGrid:
    """Rectangular RGBA8 pixel grid addressed by ``(x, y)``.

    Example:
        >>> grid = PixelGrid(3, 2)
        >>> grid.set(0, 0, Pixel(255, 0, 0, 255))
        >>> grid.get(-5, -5)
        Pixel(r=255, g=0, b=0, a=255)
    """

    def __init__(self, width: int, height: int, pixels: np.ndarray | None = None):
        """
        :param width: Width in pixels.
        :param height: Height in pixels.
        :param pixels: Optional ``(height, width, 4)`` uint8 array to take
            ownership of. A zeroed (transparent black) grid is created if
            omitted.
        """
        if pixels is None:
            pixels = np.zeros((height, width, 4), dtype=np.uint8)
        elif pixels.shape != (height, width, 4) or pixels.dtype != np.uint8:
            raise ValueError(
                f"Expected uint8 array of shape {(height, width, 4)}, "
                f"got {pixels.dtype} {pixels.shape}"
            )
        self.pixels = pixels

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PixelGrid:
        """Create a grid from an RGB8 or RGBA8 array.

        The data is always copied. RGB input gets an opaque alpha channel.
        """
        fmt = PixelFormat.from_array(arr)
        height, width = arr.shape[:2]
        if fmt.has_alpha:
            return cls(width, height, np.array(arr, dtype=np.uint8, copy=True))
        alpha = np.full((height, width, 1), 255, dtype=np.uint8)
        return cls(width, height, np.concatenate([arr, alpha], axis=2))

    @classmethod
    def from_pil(cls, image: PILImage.Image) -> PixelGrid:
        """Create a grid from a Pillow image of any mode."""
        if image.mode != 'RGBA':
            image = image.convert('RGBA')
        return cls.from_array(np.asarray(image))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the grid."""
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def clamp(self, x: int, y: int) -> tuple[int, int]:
        """Clamp a coordinate to the nearest valid pixel position."""
        return (
            min(max(x, 0), self.width - 1),
            min(max(y, 0), self.height - 1),
        )

    def get(self, x: int, y: int) -> Pixel:
        """Read a pixel, clamping out-of-range coordinates to the edge."""
        cx, cy = self.clamp(x, y)
        return Pixel(*(int(v) for v in self.pixels[cy, cx]))

    def set(self, x: int, y: int, pixel: Pixel | tuple[int, int, int, int]) -> None:
        """Write a pixel. Out-of-range coordinates raise IndexError."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} grid")
        self.pixels[y, x] = pixel

    def fill(self, pixel: Pixel | tuple[int, int, int, int]) -> None:
        """Set every pixel to the same value."""
        self.pixels[:, :] = pixel

    def copy(self) -> PixelGrid:
        """Return an owned deep copy of this grid."""
        return PixelGrid(self.width, self.height, self.pixels.copy())

    def to_array(self, format: PixelFormat = PixelFormat.RGBA8) -> np.ndarray:
        """Return a copy of the pixel data as numpy array in the given format."""
        if format.has_alpha:
            return self.pixels.copy()
        return self.pixels[:, :, :3].copy()

    def to_pil(self) -> PILImage.Image:
        """Return the grid as RGBA Pillow image."""
        from PIL import Image as PILImage
        return PILImage.fromarray(self.pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"PixelGrid(width={self.width}, height={self.height})"
