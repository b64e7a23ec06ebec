"""
Grid Display - Matrix of color cells for the current palette

Click on a cell = copy its hex code to the clipboard
"""

from typing import List, Optional

from PySide6.QtWidgets import (QWidget, QVBoxLayout, QGridLayout, QPushButton,
                               QLabel, QScrollArea, QApplication)
from PySide6.QtCore import Qt, Signal, QTimer

from ...core.color import HSL, Grid, hsl_to_hex, get_contrast_color, format_hsl

DEFAULT_TITLE = "Custom Palette"
DEFAULT_DESCRIPTION = "Adjust settings to generate your color matrix."
COPIED_FEEDBACK_MS = 1500
CELL_SIZE = 72


class ColorCell(QPushButton):
    """Single swatch showing its hex code in a contrasting text color."""

    copied = Signal(str)  # hex

    def __init__(self, color: HSL, parent=None):
        super().__init__(parent)
        self.color = color
        self.hex = hsl_to_hex(color)
        self.text_color = get_contrast_color(self.hex)
        self.label = f"{self.hex.upper()}\n{format_hsl(color)}"

        self.setFixedSize(CELL_SIZE, CELL_SIZE)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setToolTip(f"H:{color.h} S:{color.s}% L:{color.l}%")
        self.setStyleSheet(f"""
            QPushButton {{
                background-color: {self.hex};
                color: {self.text_color};
                border: none;
                font-family: monospace;
                font-size: 8pt;
                font-weight: bold;
            }}
            QPushButton:hover {{ border: 2px solid {self.text_color}; }}
        """)
        self.setText(self.label)
        self.clicked.connect(self._copy_to_clipboard)

        # Restores the label after the "Copied!" feedback
        self._feedback_timer = QTimer(self)
        self._feedback_timer.setSingleShot(True)
        self._feedback_timer.timeout.connect(self._restore_label)

    def _copy_to_clipboard(self):
        QApplication.clipboard().setText(self.hex)
        self.setText("Copied!")
        self._feedback_timer.start(COPIED_FEEDBACK_MS)
        self.copied.emit(self.hex)

    def _restore_label(self):
        self.setText(self.label)


class GridDisplay(QWidget):
    """Palette header (name, description) above the scrollable color grid."""

    color_copied = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._cells: List[List[ColorCell]] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(8)

        self.title_label = QLabel(DEFAULT_TITLE)
        self.title_label.setStyleSheet("font-size: 18pt; font-weight: bold;")
        layout.addWidget(self.title_label)

        self.description_label = QLabel(DEFAULT_DESCRIPTION)
        self.description_label.setWordWrap(True)
        self.description_label.setStyleSheet("color: #808080;")
        layout.addWidget(self.description_label)

        self.grid_widget = QWidget()
        self.grid_layout = QGridLayout(self.grid_widget)
        self.grid_layout.setContentsMargins(0, 0, 0, 0)
        self.grid_layout.setSpacing(0)
        self.grid_layout.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignHCenter)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.grid_widget)
        layout.addWidget(scroll, 1)

        self.axis_label = QLabel("Rows: Hue Shift    Columns: Value Shift")
        self.axis_label.setStyleSheet("color: #606060; font-family: monospace; font-size: 8pt;")
        layout.addWidget(self.axis_label)

    def set_theme_info(self, name: Optional[str], description: Optional[str]):
        """Show the theme name/description (defaults when blank)."""
        self.title_label.setText(name or DEFAULT_TITLE)
        self.description_label.setText(description or DEFAULT_DESCRIPTION)

    def set_grid(self, grid: Grid):
        """Rebuild the cells for a new grid."""
        while self.grid_layout.count():
            item = self.grid_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        self._cells = []
        for r, row in enumerate(grid):
            row_cells = []
            for c, color in enumerate(row):
                cell = ColorCell(color)
                cell.copied.connect(self.color_copied.emit)
                self.grid_layout.addWidget(cell, r, c)
                row_cells.append(cell)
            self._cells.append(row_cells)

    def cell_at(self, row: int, col: int) -> ColorCell:
        return self._cells[row][col]

    @property
    def hex_matrix(self) -> List[List[str]]:
        """Hex codes currently displayed, grid[row][col]."""
        return [[cell.hex for cell in row] for row in self._cells]
