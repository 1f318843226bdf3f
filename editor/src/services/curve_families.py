"""Standard curve families, in matrix form, to be transformed and displayed.

Each curve is a 2x2 complex matrix M describing |(m00*z + m01) / (m10*z + m11)| = 1
(see services.mobius_math). Useful building blocks:
- |z - a| = |z - b|: perpendicular bisector of a and b -> [[1, -a], [1, -b]]
- |z - c| = r: circle -> [[1, -c], [0, r]]
- |z - p| = k|z - q|: circle of Apollonius -> [[1, -p], [k, -k*q]]
"""
import cmath
import math

import numpy as np

from constants import (
    APOLLONIAN_FOCUS, APOLLONIAN_PENCIL_COUNT, APOLLONIAN_RATIOS,
    CARTESIAN_GRID_RANGE, CURVE_FAMILY_NAMES, POLAR_RADII, POLAR_RAY_COUNT
)


def _bisector(a, b):
    return np.array([[1, -a], [1, -b]], dtype=complex)


def _circle(center, radius):
    return np.array([[1, -center], [0, radius]], dtype=complex)


def _apollonius(p, q, k):
    return np.array([[1, -p], [k, -k * q]], dtype=complex)


def cartesian_family():
    """Vertical lines x = k followed by horizontal lines y = k."""
    vertical = [_bisector(complex(k - 1, 0), complex(k + 1, 0)) for k in CARTESIAN_GRID_RANGE]
    horizontal = [_bisector(complex(0, k - 1), complex(0, k + 1)) for k in CARTESIAN_GRID_RANGE]
    return vertical + horizontal


def polar_family():
    """Circles |z| = r and lines through the origin at evenly spaced angles."""
    circles = [_circle(0j, r) for r in POLAR_RADII]
    rays = []
    for i in range(POLAR_RAY_COUNT):
        # bisector of +/- a is the line through 0 perpendicular to a
        a = cmath.exp(1j * (math.pi * i / POLAR_RAY_COUNT + math.pi / 2))
        rays.append(_bisector(a, -a))
    return circles + rays


def apollonian_family():
    """Circles of Apollonius around the foci +/-f, and the circles through both foci."""
    p = complex(-APOLLONIAN_FOCUS, 0)
    q = complex(APOLLONIAN_FOCUS, 0)
    apollonius = [_apollonius(p, q, k) for k in APOLLONIAN_RATIOS]

    # real axis: the line through both foci
    pencil = [_bisector(1j, -1j)]
    for i in range(1, APOLLONIAN_PENCIL_COUNT):
        t = APOLLONIAN_FOCUS / math.tan(math.pi * i / APOLLONIAN_PENCIL_COUNT)
        pencil.append(_circle(complex(0, t), math.hypot(APOLLONIAN_FOCUS, t)))
    return apollonius + pencil


CURVE_FAMILIES = {
    'cartesian': cartesian_family,
    'polar': polar_family,
    'apollonian': apollonian_family,
}

assert set(CURVE_FAMILIES) == set(CURVE_FAMILY_NAMES)


def get_family_matrices(key):
    """Return the matrix list for a curve family.

    Raises:
        KeyError: if key is not a known family
    """
    try:
        builder = CURVE_FAMILIES[key]
    except KeyError:
        raise KeyError(f"unknown curve family: {key}") from None
    return builder()
