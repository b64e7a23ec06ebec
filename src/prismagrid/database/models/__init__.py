"""
Database Models - Dataclasses for persisted entities

    from prismagrid.database.models import SavedTheme
"""

from .saved_theme import SavedTheme, now_millis

__all__ = [
    "SavedTheme",
    "now_millis",
]
