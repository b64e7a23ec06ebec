"""
UI Widgets - Reusable widgets of the main window.
"""

from .grid_display import GridDisplay, ColorCell
from .control_panel import ControlPanel, ValueSlider
from .theme_library_panel import ThemeLibraryPanel
from .save_theme_dialog import SaveThemeDialog

__all__ = [
    "GridDisplay",
    "ColorCell",
    "ControlPanel",
    "ValueSlider",
    "ThemeLibraryPanel",
    "SaveThemeDialog",
]
