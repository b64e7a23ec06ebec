"""
Saved Theme Repository - CRUD operations for the theme library.
"""
import json
import sqlite3

from .base_repository import BaseRepository
from ..models import SavedTheme
from ...core.color import GridConfig


class SavedThemeRepository(BaseRepository[SavedTheme]):
    """Repository for SavedTheme entities, newest first."""

    # rowid keeps insertion order for themes saved in the same millisecond
    default_order = "created_at DESC, rowid DESC"

    @property
    def table_name(self) -> str:
        return "saved_themes"

    def _row_to_model(self, row: sqlite3.Row) -> SavedTheme:
        return SavedTheme(
            id=row["id"],
            name=row["name"],
            description=row["description"] or "",
            config=GridConfig.from_dict(json.loads(row["config"])),
            created_at=row["created_at"],
        )

    def _get_insert_sql(self) -> str:
        return """
            INSERT INTO saved_themes
            (id, name, description, config, created_at)
            VALUES (?, ?, ?, ?, ?)
        """

    def _get_update_sql(self) -> str:
        return """
            UPDATE saved_themes
            SET name = ?, description = ?, config = ?, created_at = ?
            WHERE id = ?
        """

    def _model_to_insert_tuple(self, model: SavedTheme) -> tuple:
        return (model.id, model.name, model.description,
                json.dumps(model.config.to_dict()), model.created_at)

    def _model_to_update_tuple(self, model: SavedTheme) -> tuple:
        return (model.name, model.description,
                json.dumps(model.config.to_dict()), model.created_at, model.id)
