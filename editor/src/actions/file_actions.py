"""File operations for the main window - open, save, export"""
import os

from PyQt5.QtWidgets import QFileDialog

from components.graph_canvas import render_to_image
from services.file_operations import (
	MAPPING_FILE_FILTER, PNG_FILE_FILTER,
	load_mapping_from_file, save_image_to_file, save_mapping_to_file
)
from services.state_dispatch import LoadMapping
from utils.logger import loggerRaise


class FileActions:
	"""Handles all file menu operations"""

	def __init__(self, main_window):
		"""Initialize with reference to main window

		Args:
			main_window: The MobiusEditor main window instance
		"""
		self.main_window = main_window

	def open_mapping(self):
		"""Ask for a mapping file and load it"""
		filename, _ = QFileDialog.getOpenFileName(
			self.main_window,
			"Open Mapping",
			"",
			MAPPING_FILE_FILTER
		)
		if filename:
			self.load_from_file(filename)

	def load_from_file(self, filename):
		"""Load a mapping file into the store

		Args:
			filename: Path to a mapping JSON file
		"""
		try:
			points, families = load_mapping_from_file(filename)
		except Exception as e:
			loggerRaise(e, f"Failed to load file: {str(e)}")
			return

		self.main_window.store.dispatch(LoadMapping(points, families))
		self.main_window.current_file_path = filename
		self.main_window._update_window_title()
		self.main_window._add_to_recent_files(filename)
		self.main_window.status_left.setText(f"Opened {os.path.basename(filename)}")

	def save_mapping(self):
		"""Save to the current file, or ask for one"""
		if self.main_window.current_file_path:
			self._save_to_file(self.main_window.current_file_path)
		else:
			self.save_mapping_as()

	def save_mapping_as(self):
		filename, _ = QFileDialog.getSaveFileName(
			self.main_window,
			"Save Mapping",
			"",
			MAPPING_FILE_FILTER
		)
		if filename:
			self._save_to_file(filename)

	def _save_to_file(self, filename):
		"""Internal save method

		Args:
			filename: Path to save file to
		"""
		store = self.main_window.store
		try:
			save_mapping_to_file(store.state.points, store.used_curves, filename)
		except Exception as e:
			loggerRaise(e, f"Failed to save file: {str(e)}")
			return

		self.main_window.current_file_path = filename
		self.main_window._update_window_title()
		self.main_window._add_to_recent_files(filename)
		self.main_window.status_left.setText(f"Saved to {os.path.basename(filename)}")

	def export_png(self):
		"""Render the current curves at the canvas size and save as PNG"""
		filename, _ = QFileDialog.getSaveFileName(
			self.main_window,
			"Export as PNG",
			"",
			PNG_FILE_FILTER
		)
		if not filename:
			return
		if not filename.lower().endswith('.png'):
			filename += '.png'

		self.export_to_file(filename)

	def export_to_file(self, filename):
		graph_view = self.main_window.graph_view
		theme = self.main_window.theme
		try:
			image = render_to_image(graph_view.extent, self.main_window.store.state.curves, theme, background=theme['background'])
			save_image_to_file(image, filename)
		except Exception as e:
			loggerRaise(e, f"Failed to export image: {str(e)}")
			return

		self.main_window.status_left.setText(f"Exported {os.path.basename(filename)}")
