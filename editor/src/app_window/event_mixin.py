"""Window-level event handlers for MobiusEditor"""


class EventMixin:
	"""Window events"""

	def closeEvent(self, event):
		"""Save config and stop pending redraws before closing"""
		self._save_config()
		self.graph_view.teardown()
		event.accept()
