"""
Tests for the curve model and the curve/grid drawing routines.

Drawing is checked against a mock painter: we only care which primitives
are issued with which geometry.
"""
import math
from unittest.mock import MagicMock

import pytest
from PyQt5.QtCore import QLineF, QPointF
from PyQt5.QtGui import QColor

from constants import PIXELS_PER_UNIT
from models.coord import Extent2d
from models.curve import Circle, InvalidCurveError, Line, is_curve_family
from utils.curve_painter import draw_curve, draw_gridlines, gridline_offsets, line_endpoints


# ══════════════════════════════════════════════════════════════════════════
# Data Model Invariants
# ══════════════════════════════════════════════════════════════════════════

class TestCurveInvariants:

    @pytest.mark.parametrize("radius", [0, -1, float('nan'), float('inf')])
    def test_circle_rejects_degenerate_radius(self, radius):
        with pytest.raises(InvalidCurveError):
            Circle(center=0j, radius=radius)

    def test_circle_rejects_infinite_center(self):
        with pytest.raises(InvalidCurveError):
            Circle(center=complex(float('inf'), 0), radius=1)

    def test_line_rejects_zero_slope(self):
        with pytest.raises(InvalidCurveError):
            Line(point=1 + 1j, slope=0j)

    def test_invalid_curve_is_value_error(self):
        with pytest.raises(ValueError):
            Line(point=0j, slope=0)

    def test_valid_curves(self):
        assert Circle(center=1j, radius=2).radius == 2
        assert Line(point=0j, slope=1j).slope == 1j

    def test_curves_are_immutable(self):
        circle = Circle(center=0j, radius=1)
        with pytest.raises(AttributeError):
            circle.radius = 5

    def test_family_keys(self):
        assert is_curve_family('cartesian')
        assert not is_curve_family('spiral')


# ══════════════════════════════════════════════════════════════════════════
# draw_curve
# ══════════════════════════════════════════════════════════════════════════

class TestDrawCurve:

    def test_circle_is_scaled_ellipse(self):
        painter = MagicMock()
        draw_curve(painter, Circle(center=1 - 2j, radius=3), Extent2d(100, 100))

        painter.drawEllipse.assert_called_once()
        center, rx, ry = painter.drawEllipse.call_args[0]
        assert center == QPointF(PIXELS_PER_UNIT, -2 * PIXELS_PER_UNIT)
        assert rx == ry == 3 * PIXELS_PER_UNIT
        painter.drawLine.assert_not_called()

    def test_line_is_segment_through_point(self):
        painter = MagicMock()
        draw_curve(painter, Line(point=1j, slope=1 + 0j), Extent2d(100, 100))

        painter.drawLine.assert_called_once()
        segment = painter.drawLine.call_args[0][0]
        assert isinstance(segment, QLineF)
        # Horizontal, at y = 1 unit
        assert segment.y1() == segment.y2() == PIXELS_PER_UNIT
        painter.drawEllipse.assert_not_called()

    def test_unknown_curve_type(self):
        with pytest.raises(TypeError):
            draw_curve(MagicMock(), object(), Extent2d(100, 100))

    @pytest.mark.parametrize("slope", [1 + 0j, 1j, 0.001 + 0.002j, -300 + 7j])
    def test_line_segment_spans_surface(self, slope):
        extent = Extent2d(640, 480)
        (x0, y0), (x1, y1) = line_endpoints(Line(point=0j, slope=slope), extent)
        half_length = math.hypot(x1 - x0, y1 - y0) / 2
        assert half_length == pytest.approx(max(extent.width, extent.height))


# ══════════════════════════════════════════════════════════════════════════
# Gridlines
# ══════════════════════════════════════════════════════════════════════════

class TestGridlines:

    def test_offsets_exclude_axis_and_edge(self):
        assert gridline_offsets(50) == [PIXELS_PER_UNIT, 2 * PIXELS_PER_UNIT, 3 * PIXELS_PER_UNIT]

    def test_no_offsets_on_tiny_surface(self):
        assert gridline_offsets(5) == []
        assert gridline_offsets(0) == []

    def test_line_count(self):
        painter = MagicMock()
        draw_gridlines(painter, Extent2d(100, 100), QColor('#333333'))
        # 2 axes + 3 lines on each side of each axis
        assert painter.drawLine.call_count == 2 + 2 * 3 + 2 * 3

    def test_axes_drawn_first_and_thicker(self):
        painter = MagicMock()
        widths = []
        painter.setPen.side_effect = lambda pen: widths.append(pen.widthF())
        draw_gridlines(painter, Extent2d(100, 100), QColor('#333333'))

        assert widths[0] > widths[-1]
        first = painter.drawLine.call_args_list[0][0][0]
        assert first == QLineF(-50, 0, 50, 0)
