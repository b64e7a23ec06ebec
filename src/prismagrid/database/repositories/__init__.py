"""
Repositories - Data access layer for the theme library.

    from prismagrid.database.repositories import SavedThemeRepository
"""

from .base_repository import BaseRepository
from .saved_theme_repository import SavedThemeRepository

__all__ = [
    "BaseRepository",
    "SavedThemeRepository",
]
