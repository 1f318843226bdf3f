"""Curve data model: circles and lines of the extended complex plane.

A Mobius transformation maps circles/lines to circles/lines, so these two
shapes are all the canvas ever needs to draw. Curves are immutable once
produced; degenerate shapes are rejected at construction.
"""
import math
from dataclasses import dataclass
from typing import Dict, Tuple, Union

from constants import CURVE_FAMILY_NAMES


class InvalidCurveError(ValueError):
    """Raised when a curve would be degenerate (zero radius, zero slope)."""


@dataclass(frozen=True)
class Circle:
    """The set of points |z - center| = radius."""
    center: complex
    radius: float

    def __post_init__(self):
        if not math.isfinite(self.radius) or self.radius <= 0:
            raise InvalidCurveError(f"circle radius must be positive and finite, got {self.radius}")
        if not (math.isfinite(self.center.real) and math.isfinite(self.center.imag)):
            raise InvalidCurveError(f"circle center must be finite, got {self.center}")


@dataclass(frozen=True)
class Line:
    """The set of points point + slope * t for real t."""
    point: complex
    slope: complex

    def __post_init__(self):
        if self.slope == 0:
            raise InvalidCurveError("line slope must be a nonzero direction")
        for value in (self.point, self.slope):
            if not (math.isfinite(value.real) and math.isfinite(value.imag)):
                raise InvalidCurveError(f"line coordinates must be finite, got {value}")


Curve = Union[Circle, Line]

# Family key -> ordered curves. Only active families are present.
CurveSet = Dict[str, Tuple[Curve, ...]]


def is_curve_family(key) -> bool:
    """True if key names one of the known curve families."""
    return key in CURVE_FAMILY_NAMES
