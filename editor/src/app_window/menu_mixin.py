"""Menu bar creation and menu action handlers for MobiusEditor"""

from PyQt5.QtWidgets import QMessageBox, QActionGroup

from constants import CURVE_FAMILY_NAMES, WINDOW_TITLE
from services.state_dispatch import ToggleCurves
from version import get_version


class MenuMixin:
    """Menu bar and menu action handlers"""

    def _create_menu_bar(self):
        """Create the menu bar with File, View, Help menus"""
        menubar = self.menuBar()

        # File Menu
        file_menu = menubar.addMenu("&File")

        open_action = file_menu.addAction("&Open Mapping...")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.file_actions.open_mapping)

        # Recent Files submenu
        self.recent_menu = file_menu.addMenu("Recent Files")
        self._update_recent_files_menu()

        file_menu.addSeparator()

        save_action = file_menu.addAction("&Save Mapping")
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.file_actions.save_mapping)

        save_as_action = file_menu.addAction("Save Mapping &As...")
        save_as_action.setShortcut("Ctrl+Shift+S")
        save_as_action.triggered.connect(self.file_actions.save_mapping_as)

        file_menu.addSeparator()

        export_png_action = file_menu.addAction("Export as &PNG...")
        export_png_action.setShortcut("Ctrl+E")
        export_png_action.triggered.connect(self.file_actions.export_png)

        file_menu.addSeparator()

        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut("Alt+F4")
        exit_action.triggered.connect(self.close)

        # View Menu
        view_menu = menubar.addMenu("&View")

        self.light_theme_action = view_menu.addAction("&Light Theme")
        self.light_theme_action.setCheckable(True)
        self.light_theme_action.setShortcut("Ctrl+L")
        self.light_theme_action.toggled.connect(self._on_light_theme_toggled)

        view_menu.addSeparator()

        # Curve family toggles mirror the sidebar checkboxes
        curves_menu = view_menu.addMenu("&Curves")
        self.curve_family_actions = {}
        for key, name in CURVE_FAMILY_NAMES.items():
            action = curves_menu.addAction(name)
            action.setCheckable(True)
            action.triggered.connect(lambda checked, k=key: self.store.dispatch(ToggleCurves(k, checked)))
            self.curve_family_actions[key] = action

        view_menu.addSeparator()

        # Which side of the mapping the canvas points edit
        side_menu = view_menu.addMenu("&Drag Points")
        side_group = QActionGroup(self)
        side_group.setExclusive(True)
        self.edit_side_actions = {}
        for side, label in (('out', "&Outputs"), ('in', "&Inputs")):
            action = side_menu.addAction(label)
            action.setCheckable(True)
            action.triggered.connect(lambda checked, s=side: self._set_edit_side(s))
            side_group.addAction(action)
            self.edit_side_actions[side] = action

        # Help Menu
        help_menu = menubar.addMenu("&Help")

        about_action = help_menu.addAction("&About")
        about_action.triggered.connect(self._show_about)

    def _update_menu_actions(self, state=None):
        """Sync checkable menu actions with the current state"""
        state = state or self.store.state
        used = self.store.used_curves
        for key, action in self.curve_family_actions.items():
            action.setChecked(key in state.curves or (not state.exists and key in used))
            action.setEnabled(state.exists)
        for side, action in self.edit_side_actions.items():
            action.setChecked(side == self.graph_view.edit_side)

    def _show_about(self):
        """Show about dialog"""
        QMessageBox.about(self, f"About {WINDOW_TITLE}",
            f"<h3>{WINDOW_TITLE}</h3>"
            "<p>Drag three control points to define a Mobius transformation "
            "and watch how it maps the selected curve families.</p>"
            f"<p>Version {get_version()}</p>")
