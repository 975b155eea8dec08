"""
Pytest fixtures for StackBlur tests
"""

import numpy as np
import pytest


def reference_blur_1d(line: np.ndarray, radius: int) -> np.ndarray:
    """Edge-clamped triangular blur of one (length, channels) line, computed directly."""
    length = line.shape[0]
    weights = [radius + 1 - abs(k) for k in range(-radius, radius + 1)]
    out = np.zeros_like(line)
    for pos in range(length):
        acc = np.zeros(line.shape[1], dtype=np.int64)
        for k, w in zip(range(-radius, radius + 1), weights):
            idx = min(max(pos + k, 0), length - 1)
            acc += w * line[idx].astype(np.int64)
        out[pos] = acc // ((radius + 1) ** 2)
    return out


def reference_blur(pixels: np.ndarray, radius: int) -> np.ndarray:
    """Rows first, then columns, with the intermediate result rounded to 8 bits."""
    rows = np.stack([reference_blur_1d(row, radius) for row in pixels])
    cols = np.stack([reference_blur_1d(col, radius) for col in rows.transpose(1, 0, 2)])
    return cols.transpose(1, 0, 2)


@pytest.fixture
def random_rgba() -> np.ndarray:
    """Create a 23x17 RGBA image with random content."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(17, 23, 4), dtype=np.uint8)


@pytest.fixture
def solid_red() -> np.ndarray:
    """Create a solid opaque red 3x3 image."""
    pixels = np.zeros((3, 3, 4), dtype=np.uint8)
    pixels[:, :] = (255, 0, 0, 255)
    return pixels


@pytest.fixture
def impulse_row() -> np.ndarray:
    """Create a 5x1 image with a single white pixel at x=1."""
    pixels = np.zeros((1, 5, 4), dtype=np.uint8)
    pixels[0, 1] = (255, 255, 255, 255)
    return pixels


@pytest.fixture
def reference():
    """Brute-force blur used as ground truth."""
    return reference_blur


@pytest.fixture
def reference_1d():
    """Brute-force single line blur used as ground truth."""
    return reference_blur_1d
