# PyQt5 imports
from PyQt5.QtWidgets import (
	QFrame, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QCheckBox, QComboBox, QGroupBox
)
from PyQt5.QtCore import Qt, pyqtSignal

from constants import CONTROL_POINT_COLORS, CONTROL_POINT_KEYS, CURVE_FAMILY_NAMES, DEFAULT_EDIT_SIDE, SIDEBAR_WIDTH
from models.coord import INF
from services.state_dispatch import ToggleCurves

SINGULAR_ADVISORY = (
	"Mobius transformation is nearly singular. "
	"Mobius transformations define 1-to-1 mappings, "
	"and do not exist/behave well when two inputs map to the same (or nearly the same) output. "
	"Move some of the control points farther away from each other to correct this."
)

EDIT_SIDE_LABELS = (('out', "Drag outputs"), ('in', "Drag inputs"))


def format_component(x):
	return f"{x:.4g}"


def format_ext_complex(value):
	"""Real and imaginary text for a value; the point at infinity has no parts."""
	if value is INF:
		return "∞", ""
	return format_component(value.real), format_component(value.imag)


class ComplexDisplay(QFrame):
	"""Read-only `re + im j` display"""

	def __init__(self, parent=None):
		super().__init__(parent)
		layout = QHBoxLayout(self)
		layout.setContentsMargins(0, 0, 0, 0)
		layout.setSpacing(4)

		self.real_edit = QLineEdit()
		self.real_edit.setReadOnly(True)
		self.imag_edit = QLineEdit()
		self.imag_edit.setReadOnly(True)

		layout.addWidget(self.real_edit)
		layout.addWidget(QLabel("+"))
		layout.addWidget(self.imag_edit)
		layout.addWidget(QLabel("j"))

	def set_value(self, value):
		real, imag = format_ext_complex(value)
		self.real_edit.setText(real)
		self.imag_edit.setText(imag)

	def text(self):
		return self.real_edit.text(), self.imag_edit.text()


class ControlPointDisplay(QGroupBox):
	"""Shows the in and out values of one control point"""

	def __init__(self, key, parent=None):
		super().__init__(key, parent)
		self.key = key
		color = CONTROL_POINT_COLORS.get(key)
		if color:
			self.setStyleSheet(f"QGroupBox::title {{ color: {color}; }}")

		layout = QVBoxLayout(self)
		layout.setContentsMargins(6, 6, 6, 6)

		self.in_display = ComplexDisplay()
		self.out_display = ComplexDisplay()
		for label, display in (("in", self.in_display), ("out", self.out_display)):
			row = QHBoxLayout()
			row.addWidget(QLabel(label))
			row.addWidget(display, 1)
			layout.addLayout(row)

	def set_mapping(self, mapping):
		self.in_display.set_value(mapping.in_)
		self.out_display.set_value(mapping.out)


class CurveFamilyToggle(QFrame):
	"""One checkbox per curve family; checking dispatches ToggleCurves"""

	def __init__(self, store, parent=None):
		super().__init__(parent)
		self.store = store
		layout = QVBoxLayout(self)
		layout.setContentsMargins(0, 0, 0, 0)

		self.checkboxes = {}
		for key, name in CURVE_FAMILY_NAMES.items():
			checkbox = QCheckBox(name)
			checkbox.toggled.connect(lambda checked, k=key: self._on_toggled(k, checked))
			layout.addWidget(checkbox)
			self.checkboxes[key] = checkbox

		self._updating = False

	def update_from_state(self, state):
		"""Sync checkboxes with the active families; toggles are disabled while there is no transformation."""
		self._updating = True
		try:
			for key, checkbox in self.checkboxes.items():
				checkbox.setChecked(key in state.curves or (not state.exists and key in self.store.used_curves))
				checkbox.setEnabled(state.exists)
		finally:
			self._updating = False

	def _on_toggled(self, key, checked):
		if self._updating:
			return
		self.store.dispatch(ToggleCurves(key, checked))


class ErrorDisplay(QLabel):
	"""Advisory shown while the mapping has no Mobius transformation"""

	def __init__(self, parent=None):
		super().__init__(SINGULAR_ADVISORY, parent)
		self.setWordWrap(True)
		self.setObjectName("errorDisplay")


class Sidebar(QFrame):
	"""Control point values, curve family toggles, drag side and theme"""

	# Signals
	editSideSelected = pyqtSignal(str)
	themeToggled = pyqtSignal(bool)  # True for the light theme

	def __init__(self, store, parent=None):
		super().__init__(parent)
		self.setFixedWidth(SIDEBAR_WIDTH)
		self.store = store
		self._setup_ui()

		store.stateChanged.connect(self.update_from_state)
		self.update_from_state(store.state)

	def _setup_ui(self):
		layout = QVBoxLayout(self)
		layout.setContentsMargins(10, 10, 10, 10)

		title = QLabel("Control Point Mappings")
		title.setStyleSheet("font-size: 14px; font-weight: bold;")
		layout.addWidget(title)

		self.point_displays = {}
		for key in CONTROL_POINT_KEYS:
			display = ControlPointDisplay(key)
			layout.addWidget(display)
			self.point_displays[key] = display

		layout.addWidget(QLabel("Curves"))
		self.family_toggle = CurveFamilyToggle(self.store)
		layout.addWidget(self.family_toggle)

		self.edit_side_combo = QComboBox()
		for side, label in EDIT_SIDE_LABELS:
			self.edit_side_combo.addItem(label, side)
		self.edit_side_combo.setCurrentIndex(self.edit_side_combo.findData(DEFAULT_EDIT_SIDE))
		self.edit_side_combo.currentIndexChanged.connect(
			lambda index: self.editSideSelected.emit(self.edit_side_combo.itemData(index)))
		layout.addWidget(self.edit_side_combo)

		self.theme_checkbox = QCheckBox("Light/dark mode")
		self.theme_checkbox.toggled.connect(self.themeToggled.emit)
		layout.addWidget(self.theme_checkbox)

		self.error_display = ErrorDisplay()
		self.error_display.setVisible(False)
		layout.addWidget(self.error_display)

		layout.addStretch()

	def update_from_state(self, state):
		for key, mapping in state.points.items():
			self.point_displays[key].set_mapping(mapping)
		self.family_toggle.update_from_state(state)
		self.error_display.setVisible(not state.exists)

	def set_light_theme_checked(self, checked):
		self.theme_checkbox.blockSignals(True)
		self.theme_checkbox.setChecked(checked)
		self.theme_checkbox.blockSignals(False)

	def apply_theme(self, theme):
		self.setStyleSheet(
			f"Sidebar {{ background-color: {theme['background2']}; color: {theme['foreground']}; }}"
			f"QLabel#errorDisplay {{ background-color: {theme['alertBackground']}; color: {theme['alertColor']};"
			" padding: 6px; border-radius: 4px; }"
		)
