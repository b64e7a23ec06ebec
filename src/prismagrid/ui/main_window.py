"""
Main Window - Controls, color grid and theme library side by side

Owns the current GridConfig and theme name/description. Every producer of a
configuration (manual edits, Randomize, the library, prompt generation)
goes through set_config(), which regenerates the grid.
"""

import logging
from typing import Optional

from PySide6.QtWidgets import (QMainWindow, QWidget, QHBoxLayout, QMessageBox, QDialog,
                               QInputDialog, QLineEdit)

from ..core.color import GridConfig, ThemeSuggestion, generate_grid, generate_random_config
from ..database.models import SavedTheme
from ..database.theme_library import ThemeLibrary
from ..services.theme_prompt import ThemePromptAdapter
from ..utils.credential_manager import CredentialManager
from .widgets import ControlPanel, GridDisplay, ThemeLibraryPanel, SaveThemeDialog
from .workers import ThemeGenerationWorker

logger = logging.getLogger(__name__)


class PrismaGridWindow(QMainWindow):
    """Application main window."""

    def __init__(self, library: ThemeLibrary, adapter: ThemePromptAdapter,
                 config: Optional[GridConfig] = None, parent=None):
        """
        Initialize the main window.

        Args:
            library: Saved theme library
            adapter: Prompt-to-theme adapter
            config: Initial configuration (random when omitted)
            parent: Parent widget
        """
        super().__init__(parent)
        self.library = library
        self.adapter = adapter
        self.theme_name = ""
        self.theme_description = ""
        self._worker: Optional[ThemeGenerationWorker] = None
        self._config = config or generate_random_config()

        self.setWindowTitle("PrismaGrid")
        self.resize(1280, 800)

        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.control_panel = ControlPanel(self._config)
        self.grid_display = GridDisplay()
        self.library_panel = ThemeLibraryPanel(library)
        layout.addWidget(self.control_panel)
        layout.addWidget(self.grid_display, 1)
        layout.addWidget(self.library_panel)
        self.setCentralWidget(central)
        self._create_menu()

        self.control_panel.config_changed.connect(self._on_manual_change)
        self.control_panel.randomize_requested.connect(self.randomize)
        self.control_panel.generate_requested.connect(self.start_generation)
        self.grid_display.color_copied.connect(
            lambda hex_color: self.statusBar().showMessage(f"Copied {hex_color}", 1500)
        )
        self.library_panel.theme_selected.connect(self.load_theme)
        self.library_panel.save_requested.connect(self.save_current_theme)

        self.set_config(self._config)

    def _create_menu(self):
        settings_menu = self.menuBar().addMenu("&Settings")
        self.set_key_action = settings_menu.addAction("Set API Key...")
        self.set_key_action.triggered.connect(self.set_api_key)
        self.remove_key_action = settings_menu.addAction("Remove API Key")
        self.remove_key_action.triggered.connect(self.remove_api_key)

    # === API KEY ===

    def set_api_key(self):
        """Ask for the generation API key and store it in the system keyring."""
        api_key, ok = QInputDialog.getText(
            self, "Set API Key", "Gemini API key:",
            QLineEdit.EchoMode.Password
        )
        if not ok or not api_key.strip():
            return
        if CredentialManager.save_api_key(api_key.strip()):
            self.statusBar().showMessage("API key saved", 3000)
        else:
            QMessageBox.warning(self, "Set API Key", "The API key could not be stored in the system keyring.")

    def remove_api_key(self):
        if CredentialManager.delete_api_key():
            self.statusBar().showMessage("API key removed", 3000)
        else:
            QMessageBox.warning(self, "Remove API Key", "The API key could not be removed from the system keyring.")

    @property
    def config(self) -> GridConfig:
        return self._config

    def set_config(self, config: GridConfig):
        """Show a configuration: update the controls and regenerate the grid."""
        self._config = config
        self.control_panel.set_config(config)
        self.grid_display.set_grid(generate_grid(config))

    def set_theme_info(self, name: str, description: str):
        self.theme_name = name
        self.theme_description = description
        self.grid_display.set_theme_info(name, description)

    def _on_manual_change(self, config: GridConfig):
        self._config = config
        self.grid_display.set_grid(generate_grid(config))

    def randomize(self):
        self.set_config(generate_random_config())
        self.set_theme_info("", "")

    # === LIBRARY ===

    def load_theme(self, theme: SavedTheme):
        """Show a saved theme; values outside the control ranges are clamped."""
        self.set_config(theme.config.clamped())
        self.set_theme_info(theme.name, theme.description)
        self.statusBar().showMessage(f"Loaded '{theme.name}'", 3000)

    def save_current_theme(self):
        dialog = SaveThemeDialog(self._config, self.theme_name, self.theme_description, self)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return

        theme = self.library.save(dialog.get_name(), dialog.get_description(), self._config)
        if theme is None:
            QMessageBox.warning(self, "Save Theme", "The theme could not be saved.")
            return
        self.set_theme_info(theme.name, theme.description)
        self.library_panel.refresh()
        self.statusBar().showMessage(f"Saved '{theme.name}'", 3000)

    # === GENERATION ===

    @property
    def is_generating(self) -> bool:
        return self._worker is not None

    def start_generation(self, prompt_text: str):
        """Start a prompt request; ignored while one is already in flight."""
        if self.is_generating:
            return
        self.control_panel.set_generating(True)
        self._worker = ThemeGenerationWorker(self.adapter, prompt_text, self)
        self._worker.generation_success.connect(self.apply_suggestion)
        self._worker.generation_error.connect(self._on_generation_error)
        self._worker.finished.connect(self._on_generation_finished)
        self._worker.start()

    def apply_suggestion(self, suggestion: ThemeSuggestion):
        """Apply a generated theme, clamped to the control ranges."""
        self.set_config(suggestion.config.clamped())
        self.set_theme_info(suggestion.name, suggestion.description)

    def _on_generation_error(self, message: str):
        # The previous configuration stays in place
        QMessageBox.warning(self, "Theme Generation",
                            f"Failed to generate theme. Please try again.\n\n{message}")

    def _on_generation_finished(self):
        if self._worker is not None:
            self._worker.deleteLater()
        self._worker = None
        self.control_panel.set_generating(False)
