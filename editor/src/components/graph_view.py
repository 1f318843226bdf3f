"""
Graph View - the canvas plus its three draggable control points

Wires the widgets to a StateStore that is passed in explicitly:
- stateChanged updates the canvas curves and the point positions
- a dragged point dispatches SetMapping for the side being edited
- resizes (through ExtentObserver) update the canvas and the points
"""

import logging

from PyQt5.QtWidgets import QFrame, QVBoxLayout
from PyQt5.QtCore import pyqtSignal

from constants import CONTROL_POINT_KEYS, DEFAULT_EDIT_SIDE
from components.graph_canvas import GraphCanvas
from components.movable_point import MovablePoint
from services.state_dispatch import SetMapping
from utils.extent_observer import ExtentObserver

logger = logging.getLogger(__name__)

EDIT_SIDES = ('out', 'in')


class GraphView(QFrame):
	"""Container for the GraphCanvas and the control point overlays"""

	editSideChanged = pyqtSignal(str)

	def __init__(self, store, theme, parent=None):
		super().__init__(parent)
		self.setFrameShape(QFrame.NoFrame)
		self.setMinimumSize(200, 200)

		self.store = store
		self.edit_side = DEFAULT_EDIT_SIDE

		layout = QVBoxLayout(self)
		layout.setContentsMargins(0, 0, 0, 0)
		self.canvas = GraphCanvas(self, theme=theme)
		layout.addWidget(self.canvas)

		self.extent_observer = ExtentObserver(self, parent=self)
		self.extent_observer.extentChanged.connect(self._on_extent_changed)
		self.canvas.set_extent(self.extent_observer.extent)

		# Points are overlays, not part of the layout
		self.points = {}
		for key in CONTROL_POINT_KEYS:
			point = MovablePoint(key, self)
			point.valueChanged.connect(lambda value, k=key: self._on_point_dragged(k, value))
			self.points[key] = point

		store.stateChanged.connect(self._on_state_changed)
		self._on_state_changed(store.state)

	@property
	def extent(self):
		return self.extent_observer.extent

	def set_theme(self, theme):
		self.canvas.set_theme(theme)

	def set_edit_side(self, side):
		"""Choose whether the points show and edit the in or the out values."""
		if side not in EDIT_SIDES:
			raise ValueError(f"edit side must be one of {EDIT_SIDES}, got {side!r}")
		if side == self.edit_side:
			return
		self.edit_side = side
		self._place_points(self.store.state)
		self.editSideChanged.emit(side)

	def teardown(self):
		self.canvas.teardown()
		self.extent_observer.disconnect_widget()

	# ========================================
	# Store and widget callbacks
	# ========================================

	def _on_state_changed(self, state):
		self.canvas.set_curves(state.curves)
		self._place_points(state)

	def _place_points(self, state):
		extent = self.extent
		for key, mapping in state.points.items():
			value = mapping.out if self.edit_side == 'out' else mapping.in_
			self.points[key].set_value(value, extent)
			self.points[key].raise_()

	def _on_extent_changed(self, extent):
		logger.debug("Graph extent is now %sx%s", extent.width, extent.height)
		self.canvas.set_extent(extent)
		for point in self.points.values():
			point.set_extent(extent)

	def _on_point_dragged(self, key, value):
		self.store.dispatch(SetMapping(key, **{self._side_field(): value}))

	def _side_field(self):
		return 'out' if self.edit_side == 'out' else 'in_'
