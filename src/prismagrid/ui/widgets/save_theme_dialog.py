"""
Save Theme Dialog - Name and describe the current palette before saving it
"""

from PySide6.QtWidgets import (QDialog, QVBoxLayout, QFormLayout, QLineEdit,
                               QTextEdit, QDialogButtonBox, QLabel)

from ...core.color import GridConfig, generate_grid, grid_to_hex


class SaveThemeDialog(QDialog):
    """
    Dialog for saving the current configuration to the library.

    Features:
    - Name field (required, OK disabled while blank)
    - Description field (optional)
    - Summary of the configuration being saved
    """

    def __init__(self, config: GridConfig, name: str = "", description: str = "", parent=None):
        """
        Initialize the dialog.

        Args:
            config: Configuration to save
            name: Pre-filled name (e.g., from a generated theme)
            description: Pre-filled description
            parent: Parent widget
        """
        super().__init__(parent)
        self.config = config
        self.setWindowTitle("Save Theme")
        self.setMinimumWidth(380)

        layout = QVBoxLayout(self)

        form = QFormLayout()
        self.name_edit = QLineEdit(name)
        self.name_edit.setPlaceholderText("My palette")
        form.addRow("Name:", self.name_edit)

        self.description_edit = QTextEdit()
        self.description_edit.setPlainText(description)
        self.description_edit.setFixedHeight(70)
        form.addRow("Description:", self.description_edit)
        layout.addLayout(form)

        corners = grid_to_hex(generate_grid(config))
        summary = (f"{config.rows} x {config.cols} grid, "
                   f"columns vary {config.column_mode.value}")
        if corners and corners[0]:
            summary += f" ({corners[0][0]} ... {corners[-1][-1]})"
        summary_label = QLabel(summary)
        summary_label.setStyleSheet("color: #808080;")
        layout.addWidget(summary_label)

        self.button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel
        )
        self.button_box.accepted.connect(self.accept)
        self.button_box.rejected.connect(self.reject)
        layout.addWidget(self.button_box)

        self.name_edit.textChanged.connect(self._update_save_button)
        self._update_save_button()

    def _update_save_button(self):
        save_btn = self.button_box.button(QDialogButtonBox.StandardButton.Save)
        save_btn.setEnabled(bool(self.name_edit.text().strip()))

    def get_name(self) -> str:
        return self.name_edit.text().strip()

    def get_description(self) -> str:
        return self.description_edit.toPlainText().strip()
