"""
Graph Canvas - draws the reference grid and the transformed curve families

Rendering goes to an off-screen QImage surface:
- Any change to extent, curves or theme (re)starts a single-shot frame timer,
  so a burst of changes costs one redraw per display refresh.
- The surface is reallocated, and its center-origin/y-up transform recomputed,
  only when its pixel size no longer matches the observed extent.
- paintEvent just blits the finished surface.
"""

import logging

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QColor, QImage, QPainter, QPen, QTransform

from constants import (
	CURVE_COLOR_KEY, CURVE_LINE_WIDTH, FRAME_INTERVAL_MS, GRIDLINE_COLOR_KEY,
	INITIAL_EXTENT_HEIGHT, INITIAL_EXTENT_WIDTH
)
from models.coord import Extent2d
from models.theme import default_theme
from utils.curve_painter import draw_curve, draw_gridlines

logger = logging.getLogger(__name__)


def surface_transform(extent):
	"""Origin at the center of the surface, y axis pointing up."""
	return QTransform(1, 0, 0, -1, extent.width / 2, extent.height / 2)


def render_scene(painter, transform, extent, curves, theme, clear=True):
	"""Draw gridlines and every curve of every active family, clearing the surface first if asked.

	Args:
		painter: QPainter bound to the surface
		transform: Center-origin transform for the surface
		extent: Surface size in pixels
		curves: CurveSet to draw
		theme: Theme providing the gridline and curve colors
		clear: Fill the surface with transparency before drawing
	"""
	if clear:
		# Whole pixels of the device, independent of the center-origin offset
		painter.resetTransform()
		painter.setCompositionMode(QPainter.CompositionMode_Source)
		painter.fillRect(0, 0, int(extent.width), int(extent.height), Qt.transparent)
		painter.setCompositionMode(QPainter.CompositionMode_SourceOver)

	painter.setTransform(transform)
	painter.setRenderHint(QPainter.Antialiasing)

	painter.setBrush(Qt.NoBrush)
	draw_gridlines(painter, extent, QColor(theme[GRIDLINE_COLOR_KEY]))

	pen = QPen(QColor(theme[CURVE_COLOR_KEY]))
	pen.setWidthF(CURVE_LINE_WIDTH)
	painter.setPen(pen)
	for family in curves.values():
		for curve in family:
			draw_curve(painter, curve, extent)


def render_to_image(extent, curves, theme, background=None):
	"""Render one frame into a new QImage (for export and headless rendering)."""
	width, height = int(extent.width), int(extent.height)
	image = QImage(width, height, QImage.Format_ARGB32_Premultiplied)
	image.fill(QColor(background) if background else Qt.transparent)
	painter = QPainter()
	if not painter.begin(image):
		raise RuntimeError(f"Unable to paint on a {width}x{height} image")
	try:
		# Background was filled already; clearing would erase it
		render_scene(painter, surface_transform(extent), extent, curves, theme, clear=False)
	finally:
		painter.end()
	return image


class GraphCanvas(QWidget):
	"""Widget showing the Mobius transformation's curves over a unit grid"""

	def __init__(self, parent=None, theme=None):
		super().__init__(parent)
		self.setAttribute(Qt.WA_TransparentForMouseEvents)

		# Inputs to a frame
		self._extent = Extent2d(INITIAL_EXTENT_WIDTH, INITIAL_EXTENT_HEIGHT)
		self._curves = {}
		self._theme = theme or default_theme()

		# Drawing surface state
		self._surface = None
		self._transform = QTransform()
		self._context_error_logged = False

		# Single coalesced "next frame" slot
		self._frame_timer = QTimer(self)
		self._frame_timer.setSingleShot(True)
		self._frame_timer.setInterval(FRAME_INTERVAL_MS)
		self._frame_timer.timeout.connect(self._render_frame)

		# Counters (diagnostics and tests)
		self.frames_rendered = 0
		self.surface_allocations = 0

	# ========================================
	# Inputs
	# ========================================

	@property
	def extent(self):
		return self._extent

	@property
	def curves(self):
		return self._curves

	@property
	def theme(self):
		return self._theme

	@property
	def surface(self):
		return self._surface

	def set_extent(self, extent):
		if extent == self._extent:
			return
		self._extent = extent
		self._schedule_redraw()

	def set_curves(self, curves):
		if curves is self._curves:
			return
		self._curves = curves
		self._schedule_redraw()

	def set_theme(self, theme):
		if theme.id == self._theme.id:
			return
		self._theme = theme
		self._schedule_redraw()

	# ========================================
	# Frame scheduling
	# ========================================

	def _schedule_redraw(self):
		"""Cancel any pending frame and schedule a new one."""
		self._frame_timer.start()

	def has_pending_redraw(self):
		return self._frame_timer.isActive()

	def render_now(self):
		"""Render immediately instead of waiting for the frame timer."""
		self._frame_timer.stop()
		self._render_frame()

	def teardown(self):
		"""Cancel any pending frame; call before the canvas goes away."""
		self._frame_timer.stop()

	def closeEvent(self, event):
		self.teardown()
		super().closeEvent(event)

	# ========================================
	# Rendering
	# ========================================

	def _ensure_surface(self):
		"""Resize the surface to the extent if needed. Returns False if there is nothing to draw on."""
		width, height = int(self._extent.width), int(self._extent.height)
		if width <= 0 or height <= 0:
			return False
		if self._surface is None or self._surface.width() != width or self._surface.height() != height:
			self._surface = QImage(width, height, QImage.Format_ARGB32_Premultiplied)
			self._surface.fill(Qt.transparent)
			self._transform = surface_transform(self._extent)
			self.surface_allocations += 1
		return True

	def _render_frame(self):
		if not self._ensure_surface():
			return

		painter = QPainter()
		if not painter.begin(self._surface):
			if not self._context_error_logged:
				logger.error("Failed to acquire a painter for the canvas surface; nothing will be drawn")
				self._context_error_logged = True
			return

		try:
			render_scene(painter, self._transform, self._extent, self._curves, self._theme)
		finally:
			painter.end()

		self.frames_rendered += 1
		self.update()

	def paintEvent(self, event):
		"""Blit the rendered surface"""
		if self._surface is None:
			return
		painter = QPainter(self)
		painter.drawImage(0, 0, self._surface)
		painter.end()
