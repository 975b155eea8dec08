# StackBlur - Entry Point
"""
StackBlur entry point.

StackBlur approximates a Gaussian blur with a triangular kernel applied as two
separable passes. Each pass keeps a running weighted sum in a ring buffer, so
the cost per pixel is constant no matter how large the radius is.

Example:
    >>> import numpy as np
    >>> from stackblur import stack_blur
    >>> pixels = np.zeros((64, 64, 4), dtype=np.uint8)
    >>> pixels[32, 32] = (255, 255, 255, 255)
    >>> blurred = stack_blur(pixels, radius=4)
"""

from __future__ import annotations

import logging
import numbers
import time
from typing import Any, Protocol, Union

import numpy as np
from PIL import Image as PILImage

from .config import settings
from .grid import PixelGrid
from .passes import Narrowing, horizontal_pass, vertical_pass
from .pixel_format import PixelFormat

logger = logging.getLogger(__name__)

BlurSource = Union[PixelGrid, np.ndarray, PILImage.Image]


class CompletionSignal(Protocol):
    """Anything that can be set once, such as :class:`threading.Event`."""

    def set(self) -> Any:
        ...


def check_radius(radius: Any) -> int:
    """Validate a blur radius and return it as int.

    :raises TypeError: If radius is not an integer.
    :raises ValueError: If radius is negative.
    """
    if isinstance(radius, bool) or not isinstance(radius, numbers.Integral):
        raise TypeError(f"radius must be an integer, got {type(radius).__name__}")
    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    return int(radius)


def _to_grid(source: BlurSource) -> PixelGrid:
    """Return an owned working copy of the source as PixelGrid."""
    if isinstance(source, PixelGrid):
        return source.copy()
    if isinstance(source, np.ndarray):
        return PixelGrid.from_array(source)
    if isinstance(source, PILImage.Image):
        return PixelGrid.from_pil(source)
    raise TypeError(f"Unsupported image type: {type(source).__name__}")


def check_source(source: BlurSource) -> PixelGrid:
    """Validate a blur source and return an owned working copy of it.

    :raises TypeError: If the source type is not supported.
    :raises ValueError: On an empty image, an unsupported array layout or an
        image above ``settings.MAX_PIXELS``.
    """
    grid = _to_grid(source)
    if grid.is_empty:
        raise ValueError(f"Cannot blur an empty {grid.width}x{grid.height} image")
    pixel_count = grid.width * grid.height
    if settings.MAX_PIXELS and pixel_count > settings.MAX_PIXELS:
        raise ValueError(
            f"Image of {pixel_count} pixels exceeds the limit of {settings.MAX_PIXELS}"
        )
    return grid


def from_grid(grid: PixelGrid, source: BlurSource) -> BlurSource:
    """Convert the blurred grid back to the kind of object the caller passed."""
    if isinstance(source, PixelGrid):
        return grid
    if isinstance(source, np.ndarray):
        fmt = PixelFormat.from_array(source)
        if fmt.has_alpha:
            return grid.pixels
        return grid.to_array(fmt)
    return grid.to_pil()


def blur_grid(grid: PixelGrid, radius: int,
              narrowing: Narrowing = Narrowing.TRUNCATE) -> PixelGrid:
    """Blur a grid in place: horizontal pass, then vertical pass.

    The grid must be owned by the caller; no precondition checks are made.
    """
    horizontal_pass(grid, radius, narrowing)
    vertical_pass(grid, radius, narrowing)
    return grid


def stack_blur(
    source: BlurSource,
    radius: int,
    done: CompletionSignal | None = None,
    narrowing: Narrowing | str | None = None,
) -> BlurSource:
    """Blur an RGBA image with the StackBlur approximation of a Gaussian.

    The source is never modified; the blur runs on an owned copy.

    :param source: A PixelGrid, a uint8 numpy array of shape (H, W, 4) or
        (H, W, 3), or a Pillow image. RGB data is blurred as opaque RGBA.
    :param radius: Window half-width in pixels. 0 returns an exact copy.
    :param done: Optional completion signal, ``set()`` exactly once after
        the output is fully populated. Lets a caller run the blur on a
        worker thread and wait on the signal.
    :param narrowing: Conversion of averages to 8 bits, defaults to
        ``settings.NARROWING``.
    :returns: The blurred image, same kind and size as ``source``.
    :raises TypeError: On a non-integer radius or unsupported source type.
    :raises ValueError: On a negative radius, an empty image, an unsupported
        array layout or an image above ``settings.MAX_PIXELS``.
    """
    radius = check_radius(radius)
    mode = Narrowing.parse(narrowing if narrowing is not None else settings.NARROWING)
    grid = check_source(source)

    start = time.perf_counter()
    blur_grid(grid, radius, mode)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug(
        f"StackBlur {grid.width}x{grid.height} radius={radius} "
        f"narrowing={mode.value} took {elapsed_ms:.1f}ms"
    )

    result = from_grid(grid, source)
    if done is not None:
        done.set()
    return result
