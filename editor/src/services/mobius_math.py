"""Mobius transformation math.

Transformations are 2x2 complex matrices [[a, b], [c, d]] acting on the
extended complex plane by z -> (a*z + b) / (c*z + d).

Curves are also encoded as 2x2 matrices: the matrix M stands for the set
|(m00*z + m01) / (m10*z + m11)| = 1, which is always a circle or a line.
Transforming a curve by T means composing its matrix with T^-1.
"""
import math

import numpy as np

from constants import SINGULAR_TOLERANCE
from models.coord import INF, is_finite
from models.curve import Circle, Line


def is_singular(m):
    """True if the matrix is (nearly) singular.

    The determinant is compared against the squared magnitude of the entries
    so the test does not depend on the overall scale of the matrix.
    """
    scale = float(np.sum(np.abs(m) ** 2))
    if scale == 0.0:
        return True
    return abs(np.linalg.det(m)) <= SINGULAR_TOLERANCE * scale


def compute_partial_mobius_tform(points):
    """Build the transformation sending points (z1, z2, z3) to (0, INF, 1).

    This is the cross ratio (z - z1)(z3 - z2) / ((z - z2)(z3 - z1)), with the
    factors involving an infinite point dropped. Duplicate points yield a
    singular matrix.
    """
    z1, z2, z3 = points
    inf_count = sum(1 for z in points if z is INF)
    if inf_count > 1:
        return np.zeros((2, 2), dtype=complex)

    if z1 is INF:
        return np.array([[0, z3 - z2], [1, -z2]], dtype=complex)
    if z2 is INF:
        return np.array([[1, -z1], [0, z3 - z1]], dtype=complex)
    if z3 is INF:
        return np.array([[1, -z1], [1, -z2]], dtype=complex)
    return np.array([
        [z3 - z2, -z1 * (z3 - z2)],
        [z3 - z1, -z2 * (z3 - z1)],
    ], dtype=complex)


def compute_mobius_tform(inputs, outputs):
    """Compute the transformation mapping each input to the matching output.

    Args:
        inputs: Three ExtComplex source values
        outputs: Three ExtComplex image values

    Returns:
        numpy 2x2 complex matrix, or None when no (well-conditioned)
        transformation exists, i.e. the inputs or outputs contain duplicates.
    """
    for value in list(inputs) + list(outputs):
        if value is not INF and not is_finite(value):
            return None

    t_in = compute_partial_mobius_tform(inputs)
    t_out = compute_partial_mobius_tform(outputs)
    if is_singular(t_in) or is_singular(t_out):
        return None

    tform = np.linalg.inv(t_out) @ t_in
    if is_singular(tform):
        return None
    return tform


def apply_mobius_tform(m, z):
    """Evaluate the transformation m at z (ExtComplex)."""
    a, b = m[0]
    c, d = m[1]
    if z is INF:
        if c == 0:
            return INF
        return complex(a / c)
    denom = c * z + d
    if denom == 0:
        return INF
    return complex((a * z + b) / denom)


def matrix_to_curve(m):
    """Convert the matrix form of a curve into a Circle or Line.

    The matrix represents |(m00*z + m01) / (m10*z + m11)| = 1 and is assumed
    non-singular.
    """
    row0_norm_sqr = abs(m[0, 0]) ** 2
    row1_norm_sqr = abs(m[1, 0]) ** 2

    # "min" row has the smaller leading coefficient
    if row0_norm_sqr <= row1_norm_sqr:
        min0, min1 = complex(m[0, 0]), complex(m[0, 1])
        maj0, maj1 = complex(m[1, 0]), complex(m[1, 1])
        min_norm_sqr, maj_norm_sqr = row0_norm_sqr, row1_norm_sqr
    else:
        min0, min1 = complex(m[1, 0]), complex(m[1, 1])
        maj0, maj1 = complex(m[0, 0]), complex(m[0, 1])
        min_norm_sqr, maj_norm_sqr = row1_norm_sqr, row0_norm_sqr

    # leading coefficient of one row vanishes: |z - p| = r
    if min_norm_sqr <= 1e-12 * maj_norm_sqr:
        return Circle(
            center=-maj1 / maj0,
            radius=math.sqrt(abs(min1) ** 2 / maj_norm_sqr),
        )

    maj_pt = -maj1 / maj0
    min_pt = -min1 / min0
    ratio_sqr = min_norm_sqr / maj_norm_sqr  # <= 1

    # equal leading magnitudes: perpendicular bisector of the two points
    if math.isclose(ratio_sqr, 1.0, rel_tol=1e-9):
        return Line(
            point=0.5 * (maj_pt + min_pt),
            slope=(maj_pt - min_pt) * 1j,
        )

    # otherwise a circle of Apollonius around the two points
    ratio = math.sqrt(ratio_sqr)
    affine_coeff = 1.0 / (1.0 - ratio_sqr)
    return Circle(
        center=affine_coeff * maj_pt + (1.0 - affine_coeff) * min_pt,
        radius=ratio * affine_coeff * abs(maj_pt - min_pt),
    )
