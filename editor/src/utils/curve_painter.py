"""Drawing routines for curves and the reference grid.

All routines expect a QPainter whose transform already puts the origin at the
center of the surface with the y axis pointing up (see GraphCanvas). Logical
units are multiplied by PIXELS_PER_UNIT to get pixel spacing.
"""
import math

from PyQt5.QtCore import QLineF, QPointF
from PyQt5.QtGui import QPen

from constants import AXIS_LINE_WIDTH, GRID_LINE_WIDTH, PIXELS_PER_UNIT
from models.curve import Circle, Line


def line_endpoints(line, extent):
	"""Endpoints of a segment long enough to cross the whole visible area.

	Returns:
		((x0, y0), (x1, y1)) in center-origin pixel coordinates
	"""
	t = max(extent.width, extent.height) / abs(line.slope)
	x = line.point.real * PIXELS_PER_UNIT
	y = line.point.imag * PIXELS_PER_UNIT
	dx = t * line.slope.real
	dy = t * line.slope.imag
	return (x - dx, y - dy), (x + dx, y + dy)


def draw_curve(painter, curve, extent):
	"""Draw a single curve with the painter's current pen."""
	if isinstance(curve, Circle):
		center = QPointF(curve.center.real * PIXELS_PER_UNIT, curve.center.imag * PIXELS_PER_UNIT)
		radius = curve.radius * PIXELS_PER_UNIT
		painter.drawEllipse(center, radius, radius)
	elif isinstance(curve, Line):
		(x0, y0), (x1, y1) = line_endpoints(curve, extent)
		painter.drawLine(QLineF(x0, y0, x1, y1))
	else:
		raise TypeError(f"cannot draw {type(curve).__name__}")


def gridline_offsets(half_extent):
	"""Pixel offsets of the gridlines on one side of an axis (excluding the axis)."""
	count = int(math.ceil(half_extent / PIXELS_PER_UNIT)) - 1
	return [PIXELS_PER_UNIT * i for i in range(1, max(count, 0) + 1)]


def draw_gridlines(painter, extent, color):
	"""Draw the axes and a uniform grid, one line per logical unit.

	Args:
		painter: QPainter with a center-origin transform
		extent: Surface size in pixels
		color: QColor for all grid lines
	"""
	half_w = extent.width / 2
	half_h = extent.height / 2

	# Axes slightly thicker
	pen = QPen(color)
	pen.setWidthF(AXIS_LINE_WIDTH)
	painter.setPen(pen)
	painter.drawLine(QLineF(-half_w, 0, half_w, 0))
	painter.drawLine(QLineF(0, -half_h, 0, half_h))

	pen.setWidthF(GRID_LINE_WIDTH)
	painter.setPen(pen)

	# Lines parallel to the X axis, above and below it
	for y in gridline_offsets(half_h):
		painter.drawLine(QLineF(-half_w, y, half_w, y))
		painter.drawLine(QLineF(-half_w, -y, half_w, -y))

	# Lines parallel to the Y axis, left and right of it
	for x in gridline_offsets(half_w):
		painter.drawLine(QLineF(x, -half_h, x, half_h))
		painter.drawLine(QLineF(-x, -half_h, -x, half_h))
