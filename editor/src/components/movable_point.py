"""
Movable Point - one draggable control point over the graph canvas

Each point is a small child widget of the graph container. It has two states:
- IDLE: shown at the physical position of its value, if that value is finite
  and lands inside the container.
- DRAGGING: entered on left-button press. The mouse is grabbed so the drag
  keeps going outside the point's own bounds; every move reports the clamped
  logical position through valueChanged.

Release, losing the grab, or a touch cancel all return the point to IDLE.
"""

from enum import Enum

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QEvent, QPointF, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QPainter, QPen

from constants import CONTROL_POINT_COLORS, CONTROL_POINT_RADIUS, INITIAL_EXTENT_HEIGHT, INITIAL_EXTENT_WIDTH
from models.coord import INF, Extent2d, Position2d, clamp_to_extent, is_finite, to_logical, to_physical


class DragState(Enum):
	IDLE = 0
	DRAGGING = 1


class MovablePoint(QWidget):
	"""Draggable handle for the in or out value of one control point"""

	# Signals
	valueChanged = pyqtSignal(object)  # complex, clamped to the container
	dragStarted = pyqtSignal()
	dragEnded = pyqtSignal()

	def __init__(self, key, parent=None, color=None):
		super().__init__(parent)
		self.key = key
		self.color = QColor(color or CONTROL_POINT_COLORS.get(key, '#ffffff'))

		size = 2 * CONTROL_POINT_RADIUS + 2
		self.setFixedSize(size, size)
		self.setAttribute(Qt.WA_TranslucentBackground)
		self.setCursor(Qt.OpenHandCursor)
		self.setToolTip(key)

		self._value = INF
		self._extent = Extent2d(INITIAL_EXTENT_WIDTH, INITIAL_EXTENT_HEIGHT)
		self.drag_state = DragState.IDLE

		self.hide()

	@property
	def value(self):
		return self._value

	@property
	def extent(self):
		return self._extent

	def is_dragging(self):
		return self.drag_state == DragState.DRAGGING

	# ========================================
	# Placement
	# ========================================

	def set_value(self, value, extent=None):
		"""Move the point to a new value (and optionally a new container extent)."""
		self._value = value
		if extent is not None:
			self._extent = extent
		self._update_placement()

	def set_extent(self, extent):
		self._extent = extent
		self._update_placement()

	def _update_placement(self):
		if not is_finite(self._value):
			self.hide()
			return

		pos = to_physical(self._value, self._extent)
		if not self._extent.contains(pos):
			self.hide()
			return

		self.move(int(round(pos.x - self.width() / 2)), int(round(pos.y - self.height() / 2)))
		self.show()

	# ========================================
	# Drag state machine
	# ========================================

	def begin_drag(self):
		"""Enter DRAGGING and take exclusive mouse input. Returns False if the point can't be grabbed."""
		if self.drag_state == DragState.DRAGGING:
			return True
		if not self.isVisible() or not is_finite(self._value):
			return False
		self.drag_state = DragState.DRAGGING
		self.grabMouse()
		self.setCursor(Qt.ClosedHandCursor)
		self.dragStarted.emit()
		return True

	def drag_to(self, parent_pos):
		"""Report the value under a position given in container coordinates.

		Args:
			parent_pos: QPointF relative to the container's top-left
		"""
		if self.drag_state != DragState.DRAGGING:
			return
		clamped = clamp_to_extent(Position2d(parent_pos.x(), parent_pos.y()), self._extent)
		self.valueChanged.emit(to_logical(clamped, self._extent))

	def end_drag(self):
		"""Return to IDLE and give the mouse back."""
		if self.drag_state != DragState.DRAGGING:
			return
		# State first: releaseMouse() delivers UngrabMouse back to us
		self.drag_state = DragState.IDLE
		if QWidget.mouseGrabber() is self:
			self.releaseMouse()
		self.setCursor(Qt.OpenHandCursor)
		self.dragEnded.emit()

	# ========================================
	# Qt events
	# ========================================

	def mousePressEvent(self, event):
		if event.button() == Qt.LeftButton and self.begin_drag():
			event.accept()
			return
		super().mousePressEvent(event)

	def mouseMoveEvent(self, event):
		if self.drag_state == DragState.DRAGGING:
			self.drag_to(self.mapToParent(QPointF(event.localPos())))
			event.accept()
			return
		super().mouseMoveEvent(event)

	def mouseReleaseEvent(self, event):
		if event.button() == Qt.LeftButton and self.drag_state == DragState.DRAGGING:
			self.end_drag()
			event.accept()
			return
		super().mouseReleaseEvent(event)

	def event(self, event):
		# Grab taken away (window deactivated, popup, hide) or touch sequence canceled
		if event.type() in (QEvent.UngrabMouse, QEvent.TouchCancel):
			self.end_drag()
		return super().event(event)

	def hideEvent(self, event):
		self.end_drag()
		super().hideEvent(event)

	def paintEvent(self, event):
		painter = QPainter(self)
		painter.setRenderHint(QPainter.Antialiasing)
		painter.setPen(QPen(QColor(255, 255, 255, 200), 1.5))
		painter.setBrush(QBrush(self.color))
		center = QPointF(self.width() / 2, self.height() / 2)
		painter.drawEllipse(center, CONTROL_POINT_RADIUS, CONTROL_POINT_RADIUS)
		painter.end()
