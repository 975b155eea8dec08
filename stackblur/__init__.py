"""
StackBlur - fast Gaussian blur approximation for RGBA images
"""

from .pixel_format import PixelFormat
from .grid import Pixel, PixelGrid
from .ring_buffer import RingBuffer
from .passes import (
    Narrowing,
    horizontal_pass,
    vertical_pass,
    window_size,
    divisor,
    sum_factor,
    lanes_per_chunk,
)
from .blur import stack_blur, blur_grid, check_radius, check_source, from_grid, BlurSource, CompletionSignal
from .filter import BlurFilter, StackBlurFilter, FILTER_REGISTRY
from .config import Settings, settings

__all__ = [
    # Blur
    "stack_blur",
    "blur_grid",
    "check_radius",
    "check_source",
    "from_grid",
    "BlurSource",
    "CompletionSignal",
    # Pixel grid
    "Pixel",
    "PixelGrid",
    "PixelFormat",
    # Algorithm pieces
    "RingBuffer",
    "Narrowing",
    "horizontal_pass",
    "vertical_pass",
    "window_size",
    "divisor",
    "sum_factor",
    "lanes_per_chunk",
    # Filters
    "BlurFilter",
    "StackBlurFilter",
    "FILTER_REGISTRY",
    # Configuration
    "Settings",
    "settings",
]

__version__ = "0.1.0"
