"""
Pixel dimensions for a (aspect ratio, resolution tier) pair.
"""
import logging
from typing import Tuple

from .geometry import round_half_up

logger = logging.getLogger(__name__)

LONG_SIDE = {
    '1K': 1024,
    '2K': 2048,
    '4K': 3840,
}

# (width units, height units)
ASPECT_UNITS = {
    '16:9': (16, 9),
    '9:16': (9, 16),
    '4:3': (4, 3),
    '3:4': (3, 4),
    '1:1': (1, 1),
}

ALIGNMENT = 8


def align(value: float, multiple: int = ALIGNMENT) -> int:
    """Round to the nearest multiple (half rounds up)"""
    return round_half_up(value / multiple) * multiple


def resolve_dimensions(aspect_ratio: str, resolution: str) -> Tuple[int, int]:
    """
    Convert an aspect ratio and resolution tier into provider-aligned pixels.

    The tier fixes the long side; the short side follows the ratio. Alignment
    to multiples of 8 happens after the ratio is applied, never before.

    Args:
        aspect_ratio: One of 16:9, 9:16, 4:3, 3:4, 1:1
        resolution: One of 1K, 2K, 4K

    Returns:
        tuple: (width, height)
    """
    long_side = LONG_SIDE.get(resolution)
    if long_side is None:
        logger.warning(f"⚠️ Unknown resolution tier {resolution!r}, using 1K")
        long_side = LONG_SIDE['1K']

    units = ASPECT_UNITS.get(aspect_ratio)
    if units is None:
        logger.warning(f"⚠️ Unknown aspect ratio {aspect_ratio!r}, using 1:1")
        units = ASPECT_UNITS['1:1']

    w_units, h_units = units
    if w_units >= h_units:
        width, height = long_side, long_side * h_units / w_units
    else:
        width, height = long_side * w_units / h_units, long_side

    return align(width), align(height)
