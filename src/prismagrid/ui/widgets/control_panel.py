"""
Control Panel - Prompt box and manual controls for the grid configuration

Emits a new GridConfig on every edit; the panel never mutates a config
in place.
"""

from typing import Dict

from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
                               QLabel, QLineEdit, QPushButton, QSlider, QSpinBox,
                               QGroupBox, QButtonGroup)
from PySide6.QtCore import Qt, Signal

from ...core.color import CONFIG_BOUNDS, ColumnMode, GridConfig, DEFAULT_CONFIG


class ValueSlider(QWidget):
    """Horizontal slider with a value label ("200°", "70%")."""

    value_changed = Signal(int)

    def __init__(self, minimum: int, maximum: int, suffix: str = "", parent=None):
        super().__init__(parent)
        self.suffix = suffix

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(minimum, maximum)
        layout.addWidget(self.slider, 1)

        self.value_label = QLabel()
        self.value_label.setFixedWidth(44)
        self.value_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        self.value_label.setStyleSheet("font-family: monospace;")
        layout.addWidget(self.value_label)

        self.slider.valueChanged.connect(self._on_value_changed)
        self._update_label(self.slider.value())

    def set_value(self, value: float):
        """Set without emitting value_changed."""
        self.slider.blockSignals(True)
        self.slider.setValue(int(round(value)))
        self.slider.blockSignals(False)
        self._update_label(value)

    def value(self) -> int:
        return self.slider.value()

    def _update_label(self, value: float):
        shown = int(value) if float(value).is_integer() else round(value, 1)
        self.value_label.setText(f"{shown}{self.suffix}")

    def _on_value_changed(self, value: int):
        self._update_label(value)
        self.value_changed.emit(value)


class ControlPanel(QWidget):
    """
    Left-hand panel of the main window.

    Signals:
        config_changed: Emitted with the edited GridConfig
        generate_requested: Emitted with the prompt text
        randomize_requested: Emitted when the Randomize button is clicked
    """

    config_changed = Signal(object)  # GridConfig
    generate_requested = Signal(str)
    randomize_requested = Signal()

    def __init__(self, config: GridConfig = DEFAULT_CONFIG, parent=None):
        super().__init__(parent)
        self._config = config
        self._generating = False
        self.setFixedWidth(320)

        self._setup_ui()
        self.set_config(config)

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)

        self._create_prompt_section(layout)
        self._create_base_section(layout)
        self._create_steps_section(layout)
        self._create_size_section(layout)

        self.randomize_btn = QPushButton("Randomize")
        self.randomize_btn.clicked.connect(self.randomize_requested.emit)
        layout.addWidget(self.randomize_btn)
        layout.addStretch()

    def _create_prompt_section(self, layout: QVBoxLayout):
        group = QGroupBox("PrismaGrid AI")
        group_layout = QVBoxLayout(group)

        group_layout.addWidget(QLabel("Describe a mood or theme"))
        self.prompt_edit = QLineEdit()
        self.prompt_edit.setPlaceholderText("e.g., Cyberpunk Neon, Pastel Spring...")
        self.prompt_edit.textChanged.connect(self._update_generate_button)
        self.prompt_edit.returnPressed.connect(self._on_generate)
        group_layout.addWidget(self.prompt_edit)

        self.generate_btn = QPushButton("Generate Theme")
        self.generate_btn.clicked.connect(self._on_generate)
        self._update_generate_button()
        group_layout.addWidget(self.generate_btn)

        layout.addWidget(group)

    def _bounded_slider(self, attr: str, suffix: str) -> ValueSlider:
        low, high = CONFIG_BOUNDS[attr]
        slider = ValueSlider(low, high, suffix)
        slider.value_changed.connect(lambda value, a=attr: self._set_field(a, value))
        return slider

    def _create_base_section(self, layout: QVBoxLayout):
        group = QGroupBox("Base Configuration")
        form = QFormLayout(group)

        self.hue_slider = self._bounded_slider("base_hue", "°")
        self.sat_slider = self._bounded_slider("base_sat", "%")
        self.light_slider = self._bounded_slider("base_light", "%")
        form.addRow("Base Hue", self.hue_slider)
        form.addRow("Saturation", self.sat_slider)
        form.addRow("Lightness", self.light_slider)

        layout.addWidget(group)

    def _create_steps_section(self, layout: QVBoxLayout):
        group = QGroupBox("Steps && Dimensions")
        form = QFormLayout(group)

        self.hue_step_slider = self._bounded_slider("hue_step", "°")
        form.addRow("Hue Step (Row)", self.hue_step_slider)

        # Column mode toggle
        mode_row = QHBoxLayout()
        self.mode_group = QButtonGroup(self)
        self.mode_buttons: Dict[ColumnMode, QPushButton] = {}
        for mode in ColumnMode:
            btn = QPushButton(mode.value.capitalize())
            btn.setCheckable(True)
            btn.clicked.connect(lambda checked, m=mode: self._set_field("column_mode", m))
            self.mode_group.addButton(btn)
            self.mode_buttons[mode] = btn
            mode_row.addWidget(btn)
        form.addRow("Column Mode", mode_row)

        # Single slider bound to the active step
        low, high = CONFIG_BOUNDS["light_step"]
        self.column_step_label = QLabel()
        self.column_step_slider = ValueSlider(low, high)
        self.column_step_slider.value_changed.connect(self._on_column_step_changed)
        form.addRow(self.column_step_label, self.column_step_slider)

        layout.addWidget(group)

    def _create_size_section(self, layout: QVBoxLayout):
        group = QGroupBox("Grid Size")
        form = QFormLayout(group)

        self.rows_spin = self._size_spin("rows")
        self.cols_spin = self._size_spin("cols")
        form.addRow("Rows", self.rows_spin)
        form.addRow("Columns", self.cols_spin)

        layout.addWidget(group)

    def _size_spin(self, attr: str) -> QSpinBox:
        low, high = CONFIG_BOUNDS[attr]
        spin = QSpinBox()
        spin.setRange(low, high)
        spin.valueChanged.connect(lambda value, a=attr: self._set_field(a, value))
        return spin

    # === STATE ===

    @property
    def config(self) -> GridConfig:
        return self._config

    def set_config(self, config: GridConfig):
        """Show a config without emitting config_changed."""
        self._config = config

        self.hue_slider.set_value(config.base_hue)
        self.sat_slider.set_value(config.base_sat)
        self.light_slider.set_value(config.base_light)
        self.hue_step_slider.set_value(config.hue_step)

        for mode, btn in self.mode_buttons.items():
            btn.setChecked(mode == config.column_mode)
        self._sync_column_step()

        for spin, value in ((self.rows_spin, config.rows), (self.cols_spin, config.cols)):
            spin.blockSignals(True)
            spin.setValue(int(value))
            spin.blockSignals(False)

    def set_generating(self, generating: bool):
        """Disable re-submission while a generation request is in flight."""
        self._generating = generating
        self.generate_btn.setText("Dreaming..." if generating else "Generate Theme")
        self.prompt_edit.setReadOnly(generating)
        self._update_generate_button()

    def _sync_column_step(self):
        if self._config.column_mode == ColumnMode.LIGHTNESS:
            self.column_step_label.setText("Lightness Step")
        else:
            self.column_step_label.setText("Saturation Step")
        self.column_step_slider.set_value(self._config.active_column_step)

    def _set_field(self, attr: str, value):
        if getattr(self._config, attr) == value:
            return
        self._config = self._config.replace(**{attr: value})
        if attr == "column_mode":
            self._sync_column_step()
        self.config_changed.emit(self._config)

    def _on_column_step_changed(self, value: int):
        if self._config.column_mode == ColumnMode.LIGHTNESS:
            self._set_field("light_step", value)
        else:
            self._set_field("sat_step", value)

    def _update_generate_button(self):
        has_prompt = bool(self.prompt_edit.text().strip())
        self.generate_btn.setEnabled(has_prompt and not self._generating)

    def _on_generate(self):
        prompt = self.prompt_edit.text().strip()
        if prompt and not self._generating:
            self.generate_requested.emit(prompt)
