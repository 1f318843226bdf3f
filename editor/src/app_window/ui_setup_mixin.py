"""UI setup for MobiusEditor"""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QSplitter, QLabel
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPalette, QColor

from components.graph_view import GraphView
from components.sidebar import Sidebar
from constants import SIDEBAR_WIDTH, WINDOW_WIDTH
from models.coord import INF
from models.theme import switch_theme


def build_palette(theme):
    """Fusion palette from a theme's colors"""
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor(theme['background2']))
    palette.setColor(QPalette.WindowText, QColor(theme['foreground']))
    palette.setColor(QPalette.Base, QColor(theme['background']))
    palette.setColor(QPalette.AlternateBase, QColor(theme['background2']))
    palette.setColor(QPalette.ToolTipBase, QColor(theme['background']))
    palette.setColor(QPalette.ToolTipText, QColor(theme['foreground']))
    palette.setColor(QPalette.Text, QColor(theme['foreground']))
    palette.setColor(QPalette.Button, QColor(theme['background2']))
    palette.setColor(QPalette.ButtonText, QColor(theme['foreground']))
    palette.setColor(QPalette.BrightText, QColor(theme['alertColor']))
    palette.setColor(QPalette.Highlight, QColor(theme['foreground2']))
    palette.setColor(QPalette.HighlightedText, QColor(theme['background']))
    return palette


class UISetupMixin:
    """UI initialization and component wiring"""

    def setup_ui(self):
        """Initialize and wire up all UI components"""
        self._create_menu_bar()

        # Create central widget with splitter
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)

        # Left sidebar - control point values and toggles
        self.sidebar = Sidebar(self.store, self)
        splitter.addWidget(self.sidebar)

        # Graph canvas with draggable points
        self.graph_view = GraphView(self.store, self.theme, self)
        splitter.addWidget(self.graph_view)

        splitter.setSizes([SIDEBAR_WIDTH, WINDOW_WIDTH - SIDEBAR_WIDTH])
        splitter.setCollapsible(0, False)
        splitter.setCollapsible(1, False)
        main_layout.addWidget(splitter)

        # Wire sidebar and view together
        self.sidebar.editSideSelected.connect(self._set_edit_side)
        self.sidebar.themeToggled.connect(self._on_light_theme_toggled)
        self.graph_view.editSideChanged.connect(self._on_edit_side_changed)
        self.store.stateChanged.connect(self._on_state_changed)

        # Status bar with left and right sections
        self.status_left = QLabel("Ready")
        self.status_right = QLabel("")
        self.statusBar().addWidget(self.status_left, 1)
        self.statusBar().addPermanentWidget(self.status_right)

        self._apply_theme(self.theme)
        self._update_menu_actions()
        self._update_status_bar()

    # ========================================
    # Theme
    # ========================================

    def _on_light_theme_toggled(self, checked):
        self.set_theme('light' if checked else 'dark')

    def set_theme(self, theme_id):
        """Switch theme by id; unknown ids keep the current theme"""
        theme = switch_theme(self.theme, theme_id)
        if theme is self.theme:
            return
        self.theme = theme
        self._apply_theme(theme)

    def _apply_theme(self, theme):
        self.setPalette(build_palette(theme))
        self.graph_view.set_theme(theme)
        self.sidebar.apply_theme(theme)

        is_light = theme.id == 'light'
        self.sidebar.set_light_theme_checked(is_light)
        self.light_theme_action.blockSignals(True)
        self.light_theme_action.setChecked(is_light)
        self.light_theme_action.blockSignals(False)

    # ========================================
    # State and edit side
    # ========================================

    def _set_edit_side(self, side):
        self.graph_view.set_edit_side(side)

    def _on_edit_side_changed(self, side):
        index = self.sidebar.edit_side_combo.findData(side)
        if index != self.sidebar.edit_side_combo.currentIndex():
            self.sidebar.edit_side_combo.setCurrentIndex(index)
        self._update_menu_actions()
        self._update_status_bar()

    def _on_state_changed(self, state):
        self._update_menu_actions(state)
        self._update_status_bar(state)

    def _update_status_bar(self, state=None):
        state = state or self.store.state
        if not state.exists:
            self.status_right.setText("No transformation")
            return
        count = sum(len(curves) for curves in state.curves.values())
        infinite = sum(1 for _, mapping in state.points.items() if INF in (mapping.in_, mapping.out))
        text = f"Dragging {self.graph_view.edit_side}puts | {count} curves"
        if infinite:
            text += f" | {infinite} at ∞"
        self.status_right.setText(text)
