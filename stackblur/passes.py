# StackBlur - Passes
"""
Horizontal and vertical StackBlur passes.

Each pass runs the sliding-window scan once along every row (or column) of a
grid and overwrites the grid in place. The window keeps three running totals:

- ``total``: triangular-weighted sum of the window, weights ``1..radius+1..1``
- ``in_sum``: plain sum of the pixels right of the center (still rising)
- ``out_sum``: plain sum of the center and the pixels left of it (falling)

Advancing by one pixel subtracts ``out_sum`` and adds ``in_sum`` to ``total``,
so every output pixel costs O(1) regardless of the radius.

Every row (or column) is its own sequential scan with its own window and
running totals; no window is shared between rows. For speed, a bounded chunk of
rows is advanced together with numpy, one ring slot vector per row. The chunk
size keeps the ring below ``settings.RING_BUDGET_BYTES``, so the working memory
does not grow with radius times image height.
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from .config import settings
from .grid import PixelGrid
from .ring_buffer import ACCUMULATOR_DTYPE, RingBuffer

logger = logging.getLogger(__name__)


class Narrowing(Enum):
    """How a channel average is converted back to 8 bits.

    TRUNCATE keeps the low 8 bits, like an unchecked ``uint8`` cast. CLAMP
    saturates to 0-255. With 8-bit input the average can never exceed 255, so
    both modes produce identical results on valid data.
    """
    TRUNCATE = "truncate"
    CLAMP = "clamp"

    @classmethod
    def parse(cls, value: Narrowing | str) -> Narrowing:
        if isinstance(value, Narrowing):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            options = ', '.join(m.value for m in cls)
            raise ValueError(f"Unknown narrowing mode: {value!r} (expected one of {options})") from None

    def narrow(self, values: np.ndarray) -> np.ndarray:
        if self is Narrowing.CLAMP:
            return np.clip(values, 0, 255).astype(np.uint8)
        return (values & 0xFF).astype(np.uint8)


def window_size(radius: int) -> int:
    """Number of pixels in the window (``div``)."""
    return 2 * radius + 1


def divisor(radius: int) -> int:
    """Sum of the triangular weights (``divsum``), ``(radius + 1) ** 2``."""
    return (radius + 1) * (radius + 1)


def sum_factor(radius: int) -> int:
    """Total weight of the edge pixel replicated over the trailing half."""
    return (radius + 1) * (radius + 2) // 2


def lanes_per_chunk(radius: int, channels: int = 4, budget: int | None = None) -> int:
    """Number of lines scanned together so the ring stays within ``budget`` bytes.

    At least one line is always scanned, so a single line's ring of
    ``window_size(radius)`` slots is the floor.
    """
    if budget is None:
        budget = settings.RING_BUDGET_BYTES
    slot_bytes = window_size(radius) * channels * np.dtype(ACCUMULATOR_DTYPE).itemsize
    return max(1, budget // slot_bytes)


def _scan_chunk(lines: np.ndarray, radius: int, narrowing: Narrowing) -> None:
    """Blur every line of ``lines`` along its second axis, in place.

    Each line is an independent sequential scan with its own ring slots and
    running totals; the lines only share the numpy operations that advance
    them.

    :param lines: uint8 array (or view) of shape ``(lanes, length, 4)``.
    :param radius: Blur radius, >= 0.
    :param narrowing: Conversion of the averaged sums to 8 bits.
    """
    lanes, length, channels = lines.shape
    last = length - 1
    radius_plus1 = radius + 1
    divsum = divisor(radius)

    ring = RingBuffer(radius, lanes=lanes, channels=channels)

    # Seed with the first pixel replicated over the trailing half
    pixel = lines[:, 0].astype(ACCUMULATOR_DTYPE)
    out_sum = radius_plus1 * pixel
    total = sum_factor(radius) * pixel
    in_sum = np.zeros_like(pixel)
    ring.seed(pixel)

    # Preload the leading half
    for i in range(1, radius_plus1):
        pixel = lines[:, min(i, last)].astype(ACCUMULATOR_DTYPE)
        ring.load(radius + i, pixel)
        total += pixel * (radius_plus1 - i)
        in_sum += pixel

    ring.rewind()

    for pos in range(length):
        lines[:, pos] = narrowing.narrow(total // divsum)

        total -= out_sum
        out_sum -= ring.read_in()

        # Only the final step reads a rewritten pixel, and its sums are unused
        pixel = lines[:, min(pos + radius_plus1, last)].astype(ACCUMULATOR_DTYPE)
        ring.write_in(pixel)
        in_sum += pixel
        total += in_sum
        ring.advance_in()

        pixel = ring.read_out()
        out_sum += pixel
        in_sum -= pixel
        ring.advance_out()


def _scan_lines(lines: np.ndarray, radius: int, narrowing: Narrowing) -> None:
    """Blur all lines of a ``(lanes, length, 4)`` array in bounded chunks, in place."""
    lanes, _, channels = lines.shape
    chunk = lanes_per_chunk(radius, channels)
    for start in range(0, lanes, chunk):
        _scan_chunk(lines[start:start + chunk], radius, narrowing)


def horizontal_pass(grid: PixelGrid, radius: int,
                    narrowing: Narrowing = Narrowing.TRUNCATE) -> None:
    """Blur every row of ``grid`` left to right, in place."""
    logger.debug(f"Horizontal pass: {grid.height} rows of {grid.width} px, radius={radius}")
    _scan_lines(grid.pixels, radius, narrowing)


def vertical_pass(grid: PixelGrid, radius: int,
                  narrowing: Narrowing = Narrowing.TRUNCATE) -> None:
    """Blur every column of ``grid`` top to bottom, in place."""
    logger.debug(f"Vertical pass: {grid.width} columns of {grid.height} px, radius={radius}")
    # Transposed view, so writes land in the grid itself
    _scan_lines(grid.pixels.transpose(1, 0, 2), radius, narrowing)
