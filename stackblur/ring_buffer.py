"""
Sliding window for the blur scans.

The window is a fixed-size circular buffer of ``div = 2 * radius + 1`` slots,
stored as one numpy array and addressed by two cursors instead of a linked
cycle of nodes. Each slot holds one RGBA accumulator per lane, where a lane is
one row (horizontal pass) or one column (vertical pass) being scanned.
"""

import numpy as np

# Accumulator type, wide enough for any radius on 8-bit channels
ACCUMULATOR_DTYPE = np.int64


class RingBuffer:
    """Circular window of ``2 * radius + 1`` per-channel accumulator slots.

    ``in_index`` points at the slot that receives the pixel entering the
    window, ``out_index`` at the slot whose pixel is about to leave it.
    ``end_index`` is the slot at offset ``radius + 1``, where ``out_index``
    restarts for every scan.
    """

    def __init__(self, radius: int, lanes: int = 1, channels: int = 4):
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        self.radius = radius
        self.div = 2 * radius + 1
        self.end_index = (radius + 1) % self.div
        self.slots = np.zeros((self.div, lanes, channels), dtype=ACCUMULATOR_DTYPE)
        self.in_index = 0
        self.out_index = self.end_index

    def __len__(self) -> int:
        return self.div

    def seed(self, pixel: np.ndarray) -> None:
        """Fill the first ``radius + 1`` slots (the trailing half) with ``pixel``."""
        self.slots[:self.radius + 1] = pixel

    def load(self, offset: int, pixel: np.ndarray) -> None:
        """Store ``pixel`` at a fixed slot, used to preload the leading half."""
        self.slots[offset % self.div] = pixel

    def rewind(self) -> None:
        """Reset the cursors to the start of a scan."""
        self.in_index = 0
        self.out_index = self.end_index

    def read_in(self) -> np.ndarray:
        return self.slots[self.in_index]

    def write_in(self, pixel: np.ndarray) -> None:
        self.slots[self.in_index] = pixel

    def read_out(self) -> np.ndarray:
        return self.slots[self.out_index]

    def advance_in(self) -> None:
        self.in_index += 1
        if self.in_index == self.div:
            self.in_index = 0

    def advance_out(self) -> None:
        self.out_index += 1
        if self.out_index == self.div:
            self.out_index = 0

    def __repr__(self) -> str:
        return (
            f"RingBuffer(radius={self.radius}, div={self.div}, "
            f"in_index={self.in_index}, out_index={self.out_index})"
        )
