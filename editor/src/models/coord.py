"""Coordinate systems for the Mobius canvas.

Two coordinate systems are in play:
- Logical: complex numbers. Origin at the center of the canvas, abstract units,
  imaginary axis points UP.
- Physical: pixel positions. Origin at the top-left of the canvas, y axis
  points DOWN.

Logical values are plain Python ``complex``. The extended complex plane adds
the point at infinity, represented by the ``INF`` singleton.
"""
import math
from dataclasses import dataclass
from typing import Union

from constants import PIXELS_PER_UNIT


class PointAtInfinity:
    """The single point at infinity of the extended complex plane.

    Has no coordinates: it can never be drawn or dragged.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'INF'

    def __str__(self):
        return '∞'

    def __reduce__(self):
        return (PointAtInfinity, ())


INF = PointAtInfinity()

# Type aliases
Complex = complex
ExtComplex = Union[complex, PointAtInfinity]


def is_finite(value: ExtComplex) -> bool:
    """True if value is a regular complex number with finite components."""
    if value is INF:
        return False
    return math.isfinite(value.real) and math.isfinite(value.imag)


@dataclass(frozen=True)
class Position2d:
    """Pixel position on the canvas (origin top-left, y down)."""
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = pos"""
        return iter((self.x, self.y))


@dataclass(frozen=True)
class Extent2d:
    """Pixel width/height of the render surface."""
    width: float
    height: float

    def __iter__(self):
        return iter((self.width, self.height))

    def contains(self, p: Position2d) -> bool:
        """True if p lies inside [0, width] x [0, height]."""
        return 0 <= p.x <= self.width and 0 <= p.y <= self.height


def to_physical(c: complex, extent: Extent2d) -> Position2d:
    """Convert a logical complex value to physical pixel coordinates.

    Args:
        c: Complex value (finite)
        extent: Size of the canvas c is placed on

    Returns:
        Position2d: Pixel coordinates (Y-down)
    """
    return Position2d(
        x=extent.width / 2 + c.real * PIXELS_PER_UNIT,
        y=extent.height / 2 - c.imag * PIXELS_PER_UNIT,
    )


def to_logical(p: Position2d, extent: Extent2d) -> complex:
    """Convert physical pixel coordinates to a logical complex value.

    Exact inverse of ``to_physical`` for the same extent.

    Args:
        p: Pixel coordinates (Y-down)
        extent: Size of the canvas p was measured on

    Returns:
        complex: Logical value (imaginary axis up)
    """
    return complex(
        (p.x - extent.width / 2) / PIXELS_PER_UNIT,
        (extent.height / 2 - p.y) / PIXELS_PER_UNIT,
    )


def clamp_to_extent(p: Position2d, extent: Extent2d) -> Position2d:
    """Clamp a pixel position so it lies within the extent."""
    return Position2d(
        x=min(extent.width, max(0, p.x)),
        y=min(extent.height, max(0, p.y)),
    )
