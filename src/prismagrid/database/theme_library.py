"""
Theme Library - Durable, newest-first collection of saved palettes.

Wraps the saved theme repository with the operations the UI needs:
list, save, delete, plus JSON export/import of the whole library.
"""
import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .connection_pool import ConnectionPool
from .schema_manager import SchemaManager
from .models import SavedTheme
from .repositories import SavedThemeRepository
from ..core.color import GridConfig

logger = logging.getLogger(__name__)

# Export format version
EXPORT_VERSION = "1.0"
EXPORT_TYPE = "themes"

UNTITLED_NAME = "Untitled Palette"


class ThemeLibrary:
    """
    Saved theme library backed by SQLite.

    Usage:
        library = ThemeLibrary(db_path)
        theme = library.save("Ocean", "Cool blues", config)
        for theme in library.list():
            print(theme.name)
        library.delete(theme.id)
    """

    def __init__(self, db_path: Path):
        """
        Open (and create if needed) the library database.

        Args:
            db_path: Path to the SQLite file
        """
        self.db_path = Path(db_path)
        SchemaManager(self.db_path).initialize()
        self._pool = ConnectionPool(self.db_path)
        self._repo = SavedThemeRepository(self._pool)

    def list(self) -> List[SavedTheme]:
        """All saved themes, newest first."""
        return self._repo.get_all()

    def get(self, theme_id: str) -> Optional[SavedTheme]:
        """Saved theme by id, or None."""
        return self._repo.get_by_id(theme_id)

    def count(self) -> int:
        return self._repo.count()

    def save(self, name: str, description: str, config: GridConfig) -> Optional[SavedTheme]:
        """
        Save a configuration as a new theme at the head of the library.

        Args:
            name: Display name (blank names become "Untitled Palette")
            description: Free-text description
            config: Configuration snapshot

        Returns:
            The stored SavedTheme, or None if the write failed
        """
        theme = SavedTheme(
            id="",
            name=(name or "").strip() or UNTITLED_NAME,
            description=(description or "").strip(),
            config=config,
        )
        if not self._repo.add(theme):
            return None
        logger.info(f"Theme saved: {theme.name} ({theme.id})")
        return theme

    def rename(self, theme_id: str, name: str) -> Optional[SavedTheme]:
        """
        Change the name of a saved theme. Config and timestamp are kept.

        Returns:
            The updated SavedTheme, or None if the id is unknown or the write failed
        """
        theme = self._repo.get_by_id(theme_id)
        if theme is None:
            return None
        theme.name = (name or "").strip() or UNTITLED_NAME
        if not self._repo.update(theme):
            return None
        logger.info(f"Theme renamed: {theme.name} ({theme.id})")
        return theme

    def delete(self, theme_id: str) -> bool:
        """
        Remove a theme. Unknown ids are ignored.

        Returns:
            False only if the database write failed
        """
        deleted = self._repo.delete(theme_id)
        if deleted:
            logger.info(f"Theme deleted: {theme_id}")
        return deleted

    # === EXPORT / IMPORT ===

    def export_data(self) -> Dict[str, Any]:
        """Library contents as a dictionary ready for JSON serialization."""
        return {
            "export_type": EXPORT_TYPE,
            "version": EXPORT_VERSION,
            "exported_at": datetime.now().isoformat(),
            "themes": [theme.to_dict() for theme in self.list()],
        }

    def export_to_json(self, path: Path) -> int:
        """
        Write the whole library to a JSON file.

        Returns:
            Number of exported themes
        """
        data = self.export_data()
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.info(f"Exported {len(data['themes'])} themes to {path}")
        return len(data["themes"])

    def import_data(self, data: Dict[str, Any]) -> int:
        """
        Add the themes of an export to the library.

        Themes whose id already exists, and malformed records, are skipped.

        Returns:
            Number of imported themes

        Raises:
            ValueError: If the data is not a theme export
        """
        if not isinstance(data, dict) or data.get("export_type") != EXPORT_TYPE:
            raise ValueError("Not a theme library export")

        imported = 0
        for record in data.get("themes", []):
            try:
                theme = SavedTheme.from_dict(record)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed theme record: {e}")
                continue
            if self._repo.exists(theme.id):
                continue
            if self._repo.add(theme):
                imported += 1
        logger.info(f"Imported {imported} themes")
        return imported

    def import_from_json(self, path: Path) -> int:
        """Import themes from a JSON file written by export_to_json()."""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return self.import_data(data)

    def close(self):
        """Close pooled connections."""
        self._pool.close_all()


# Global instance
_theme_library: Optional[ThemeLibrary] = None
_library_lock = threading.Lock()


def get_theme_library(db_path: Optional[Path] = None) -> ThemeLibrary:
    """
    Get the global theme library instance.

    Args:
        db_path: Database path; defaults to the path from settings
    """
    global _theme_library

    with _library_lock:
        if _theme_library is None:
            if db_path is None:
                from ..config.settings import load_settings, get_db_path
                db_path = get_db_path(load_settings())
            _theme_library = ThemeLibrary(db_path)
        return _theme_library


def reset_theme_library():
    """Reset the global library (useful for testing)."""
    global _theme_library

    with _library_lock:
        if _theme_library is not None:
            _theme_library.close()
            _theme_library = None
