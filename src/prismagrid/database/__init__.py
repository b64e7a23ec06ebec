"""
Database - SQLite persistence for the saved theme library.
"""

from .theme_library import ThemeLibrary, get_theme_library, reset_theme_library
from .models import SavedTheme

__all__ = [
    "ThemeLibrary",
    "SavedTheme",
    "get_theme_library",
    "reset_theme_library",
]
