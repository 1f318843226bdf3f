import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Output to console
    ]
)

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow

# Model and service imports
from models.theme import lookup_theme, default_theme
from services.state_store import StateStore
from services.transformation_service import LocalTransformationService

# Utility imports
from utils.logger import set_main_window

# Action imports
from actions.file_actions import FileActions

# Mixin imports
from app_window.menu_mixin import MenuMixin
from app_window.event_mixin import EventMixin
from app_window.config_mixin import ConfigMixin
from app_window.ui_setup_mixin import UISetupMixin

from constants import (
    CONFIG_DIR_NAME, CONFIG_FILE_NAME, MAX_RECENT_FILES,
    WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
)


class MobiusEditor(MenuMixin, EventMixin, ConfigMixin, UISetupMixin, QMainWindow):
    def __init__(self, service=None, config_dir=None):
        super().__init__()
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)

        # Track current file
        self.current_file_path = None

        # Recent files and settings
        self.recent_files = []
        self.max_recent_files = MAX_RECENT_FILES
        self.config_dir = config_dir or os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
        self.config_file = os.path.join(self.config_dir, CONFIG_FILE_NAME)
        config = self._load_config()

        self.theme = lookup_theme(config['theme']) or default_theme()

        # Single source of truth for the mapping and curves
        self.store = StateStore.bootstrap(
            config['points'],
            config['curve_families'],
            service or LocalTransformationService(),
            parent=self,
        )

        # Initialize global logger with main window reference
        set_main_window(self)

        # Initialize action handlers (composition pattern)
        self.file_actions = FileActions(self)

        self.setup_ui()
        self._update_window_title()

    def _update_window_title(self):
        if self.current_file_path:
            self.setWindowTitle(f"{WINDOW_TITLE} - {os.path.basename(self.current_file_path)}")
        else:
            self.setWindowTitle(WINDOW_TITLE)


def main():
    """Main entry point for the Mobius Visualizer application"""
    app = QtWidgets.QApplication([])
    app.setStyle("Fusion")

    window = MobiusEditor()
    window.show()
    app.exec_()


if __name__ == "__main__":
    main()
