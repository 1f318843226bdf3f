"""Keeps an Extent2d in sync with the size of a widget."""
import logging

from PyQt5.QtCore import QEvent, QObject, pyqtSignal

from constants import INITIAL_EXTENT_HEIGHT, INITIAL_EXTENT_WIDTH
from models.coord import Extent2d

logger = logging.getLogger(__name__)


def widget_extent(widget):
	"""Content-box size of a widget (excludes contents margins)."""
	rect = widget.contentsRect()
	return Extent2d(rect.width(), rect.height())


class ExtentObserver(QObject):
	"""Watches a widget's resize events and reports its content size.

	If there is no widget to observe, the extent stays at its initial value.
	"""

	extentChanged = pyqtSignal(object)  # Extent2d

	def __init__(self, widget, initial=None, parent=None):
		super().__init__(parent)
		self._extent = initial or Extent2d(INITIAL_EXTENT_WIDTH, INITIAL_EXTENT_HEIGHT)
		self._widget = widget

		if widget is None:
			logger.error("No widget passed to ExtentObserver; nothing will be observed")
			return

		widget.installEventFilter(self)
		if widget.isVisible():
			self._extent = widget_extent(widget)

	@property
	def extent(self):
		return self._extent

	def disconnect_widget(self):
		"""Stop observing the widget."""
		if self._widget is not None:
			self._widget.removeEventFilter(self)
			self._widget = None

	def eventFilter(self, obj, event):
		"""Report the new size whenever the observed widget is resized"""
		if obj is self._widget and event.type() == QEvent.Resize:
			extent = widget_extent(obj)
			if extent != self._extent:
				self._extent = extent
				self.extentChanged.emit(extent)
		return super().eventFilter(obj, event)
