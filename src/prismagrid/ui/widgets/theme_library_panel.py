"""
Theme Library Panel - Browse, load, rename and delete saved palettes
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QListWidget,
                               QListWidgetItem, QPushButton, QLabel, QMessageBox,
                               QFileDialog, QInputDialog, QLineEdit)
from PySide6.QtCore import Qt, Signal

from ...core.color import generate_grid, grid_to_hex
from ...database.models import SavedTheme
from ...database.theme_library import ThemeLibrary

logger = logging.getLogger(__name__)


class ThemeLibraryPanel(QWidget):
    """
    List of saved themes, newest first.

    Signals:
        theme_selected: Emitted with the SavedTheme to load
        save_requested: Emitted when the user asks to save the current palette
    """

    theme_selected = Signal(object)  # SavedTheme
    save_requested = Signal()

    def __init__(self, library: ThemeLibrary, parent=None):
        super().__init__(parent)
        self.library = library
        self.setFixedWidth(260)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 12, 8, 12)

        title = QLabel("Saved Themes")
        title.setStyleSheet("font-weight: bold;")
        layout.addWidget(title)

        self.theme_list = QListWidget()
        self.theme_list.itemDoubleClicked.connect(self._on_item_activated)
        self.theme_list.currentItemChanged.connect(self._update_buttons)
        layout.addWidget(self.theme_list, 1)

        self.empty_label = QLabel("No saved themes yet.")
        self.empty_label.setStyleSheet("color: #808080;")
        layout.addWidget(self.empty_label)

        buttons = QHBoxLayout()
        self.save_btn = QPushButton("Save")
        self.save_btn.clicked.connect(self.save_requested.emit)
        self.load_btn = QPushButton("Load")
        self.load_btn.clicked.connect(self._on_load)
        self.rename_btn = QPushButton("Rename")
        self.rename_btn.clicked.connect(self._on_rename)
        self.delete_btn = QPushButton("Delete")
        self.delete_btn.clicked.connect(self._on_delete)
        for btn in (self.save_btn, self.load_btn, self.rename_btn, self.delete_btn):
            buttons.addWidget(btn)
        layout.addLayout(buttons)

        transfer = QHBoxLayout()
        self.export_btn = QPushButton("Export...")
        self.export_btn.clicked.connect(self._on_export)
        self.import_btn = QPushButton("Import...")
        self.import_btn.clicked.connect(self._on_import)
        transfer.addWidget(self.export_btn)
        transfer.addWidget(self.import_btn)
        layout.addLayout(transfer)

        self.refresh()

    def refresh(self):
        """Reload the list from the library."""
        self.theme_list.clear()
        for theme in self.library.list():
            item = QListWidgetItem(theme.name)
            item.setData(Qt.ItemDataRole.UserRole, theme)
            item.setToolTip(self._tooltip(theme))
            self.theme_list.addItem(item)
        self.empty_label.setVisible(self.theme_list.count() == 0)
        self._update_buttons()

    def _tooltip(self, theme: SavedTheme) -> str:
        try:
            created = datetime.fromtimestamp(theme.created_at / 1000).strftime("%Y-%m-%d %H:%M")
        except (OverflowError, OSError, ValueError):
            created = ""
        hexes = grid_to_hex(generate_grid(theme.config.clamped()))
        preview = " ".join(hexes[0][:4]) if hexes and hexes[0] else ""
        lines = [theme.name, theme.description, created, preview]
        return "\n".join(line for line in lines if line)

    def selected_theme(self) -> Optional[SavedTheme]:
        item = self.theme_list.currentItem()
        return item.data(Qt.ItemDataRole.UserRole) if item else None

    def _update_buttons(self, *args):
        has_selection = self.selected_theme() is not None
        self.load_btn.setEnabled(has_selection)
        self.rename_btn.setEnabled(has_selection)
        self.delete_btn.setEnabled(has_selection)
        self.export_btn.setEnabled(self.theme_list.count() > 0)

    def _on_item_activated(self, item: QListWidgetItem):
        self.theme_selected.emit(item.data(Qt.ItemDataRole.UserRole))

    def _on_load(self):
        theme = self.selected_theme()
        if theme:
            self.theme_selected.emit(theme)

    def _on_rename(self):
        theme = self.selected_theme()
        if theme is None:
            return
        name, ok = QInputDialog.getText(
            self, "Rename Theme", "Name:",
            QLineEdit.EchoMode.Normal, theme.name
        )
        if not ok or not name.strip() or name.strip() == theme.name:
            return
        if self.library.rename(theme.id, name) is None:
            QMessageBox.warning(self, "Rename Theme", "Could not rename the theme.")
        self.refresh()

    def _on_delete(self):
        theme = self.selected_theme()
        if theme is None:
            return
        reply = QMessageBox.question(
            self, "Delete Theme",
            f"Delete '{theme.name}' from the library?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        if reply != QMessageBox.StandardButton.Yes:
            return
        if not self.library.delete(theme.id):
            QMessageBox.warning(self, "Delete Theme", "Could not delete the theme.")
        self.refresh()

    def _on_export(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Themes", "prismagrid_themes.json", "JSON (*.json)"
        )
        if not path:
            return
        try:
            count = self.library.export_to_json(Path(path))
        except OSError as e:
            logger.error(f"Theme export failed: {e}")
            QMessageBox.warning(self, "Export Themes", f"Export failed:\n{e}")
            return
        QMessageBox.information(self, "Export Themes", f"{count} theme(s) exported.")

    def _on_import(self):
        path, _ = QFileDialog.getOpenFileName(self, "Import Themes", "", "JSON (*.json)")
        if not path:
            return
        try:
            count = self.library.import_from_json(Path(path))
        except (OSError, ValueError) as e:
            logger.error(f"Theme import failed: {e}")
            QMessageBox.warning(self, "Import Themes", f"Import failed:\n{e}")
            return
        self.refresh()
        QMessageBox.information(self, "Import Themes", f"{count} theme(s) imported.")
