"""Configuration management for MobiusEditor"""

import os
import json
import logging
from PyQt5.QtWidgets import QMessageBox

from constants import DEFAULT_CURVE_FAMILIES, DEFAULT_THEME, THEMES
from models.curve import is_curve_family
from models.state import MappingSet
from services.wire_format import WireFormatError, decode_mapping_set, encode_mapping_set
from utils.logger import loggerRaise

logger = logging.getLogger(__name__)


def default_config():
	return {
		'theme': DEFAULT_THEME,
		'curve_families': list(DEFAULT_CURVE_FAMILIES),
		'points': MappingSet.default(),
		'recent_files': [],
	}


def parse_config(data):
	"""Turn raw config JSON into settings, falling back to defaults per entry"""
	config = default_config()
	if not isinstance(data, dict):
		logger.warning("Ignoring config: expected an object")
		return config

	theme = data.get('theme')
	if theme in THEMES:
		config['theme'] = theme
	elif theme is not None:
		logger.warning("Ignoring unknown theme in config: %s", theme)

	families = data.get('curve_families')
	if isinstance(families, list):
		config['curve_families'] = [key for key in families if is_curve_family(key)]

	if 'points' in data:
		try:
			config['points'] = decode_mapping_set(data['points'])
		except WireFormatError as e:
			logger.warning("Ignoring saved control points: %s", e)

	recent = data.get('recent_files')
	if isinstance(recent, list):
		config['recent_files'] = [f for f in recent if isinstance(f, str)]
	return config


class ConfigMixin:
	"""Configuration file operations and recent files"""

	def _load_config(self):
		"""Load settings from the config file; missing file means defaults"""
		config = default_config()
		if os.path.exists(self.config_file):
			try:
				with open(self.config_file, 'r', encoding='utf-8') as f:
					config = parse_config(json.load(f))
			except (OSError, ValueError) as e:
				logger.warning("Unreadable config %s, using defaults: %s", self.config_file, e)

		# Filter out files that no longer exist
		self.recent_files = [f for f in config['recent_files'] if os.path.exists(f)]
		return config

	def _save_config(self):
		"""Save theme, families, control points and recent files to the config file"""
		try:
			# Create config directory if it doesn't exist
			os.makedirs(self.config_dir, exist_ok=True)

			config = {
				'theme': self.theme.id,
				'curve_families': self.store.used_curves,
				'points': encode_mapping_set(self.store.state.points),
				'recent_files': self.recent_files[:self.max_recent_files],
			}

			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(config, f, indent=2)
		except Exception as e:
			loggerRaise(e, "Error saving config")

	def _add_to_recent_files(self, filepath):
		"""Add a file to the recent files list"""
		# Remove if already in list
		if filepath in self.recent_files:
			self.recent_files.remove(filepath)

		# Add to front of list
		self.recent_files.insert(0, filepath)

		# Trim to max size
		self.recent_files = self.recent_files[:self.max_recent_files]

		# Update menu
		if hasattr(self, 'recent_menu'):
			self._update_recent_files_menu()

		self._save_config()

	def _update_recent_files_menu(self):
		"""Update the Recent Files submenu"""
		self.recent_menu.clear()

		if not self.recent_files:
			no_recent = self.recent_menu.addAction("No recent files")
			no_recent.setEnabled(False)
		else:
			for filepath in self.recent_files:
				if os.path.exists(filepath):
					filename = os.path.basename(filepath)
					action = self.recent_menu.addAction(filename)
					action.setToolTip(filepath)
					# Use lambda with default argument to capture filepath
					action.triggered.connect(lambda checked, f=filepath: self._open_recent_file(f))

			self.recent_menu.addSeparator()
			clear_action = self.recent_menu.addAction("Clear Recent Files")
			clear_action.triggered.connect(self._clear_recent_files)

	def _clear_recent_files(self):
		"""Clear the recent files list"""
		self.recent_files = []
		self._update_recent_files_menu()
		self._save_config()

	def _open_recent_file(self, filepath):
		"""Open a file from the recent files list"""
		if not os.path.exists(filepath):
			QMessageBox.warning(self, "File Not Found", f"The file no longer exists:\n{filepath}")
			# Remove from recent files
			self.recent_files.remove(filepath)
			self._update_recent_files_menu()
			self._save_config()
			return

		self.file_actions.load_from_file(filepath)
