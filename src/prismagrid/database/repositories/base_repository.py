"""
Base Repository - Abstract base class for repositories.

Provides common CRUD operations over a single table keyed by `id`.
"""
import sqlite3
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, List, Optional
import logging

from ..connection_pool import ConnectionPool

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Subclasses must implement:
    - table_name: Name of the database table
    - _row_to_model: Convert database row to model instance
    - _get_insert_sql / _model_to_insert_tuple: INSERT statement and values
    - _get_update_sql / _model_to_update_tuple: UPDATE statement and values (id last)

    Write methods log failures and return False; reads propagate sqlite3 errors.
    """

    # ORDER BY clause used by get_all()
    default_order = "id"

    def __init__(self, pool: ConnectionPool):
        """
        Initialize repository with connection pool.

        Args:
            pool: ConnectionPool instance for database access
        """
        self.pool = pool

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Return the name of the database table."""

    @abstractmethod
    def _row_to_model(self, row: sqlite3.Row) -> T:
        """Convert a database row to a model instance."""

    @abstractmethod
    def _get_insert_sql(self) -> str:
        """Return the INSERT SQL statement."""

    @abstractmethod
    def _get_update_sql(self) -> str:
        """Return the UPDATE SQL statement."""

    @abstractmethod
    def _model_to_insert_tuple(self, model: T) -> tuple:
        """Convert model to tuple for INSERT."""

    @abstractmethod
    def _model_to_update_tuple(self, model: T) -> tuple:
        """Convert model to tuple for UPDATE (values + id)."""

    def get_all(self, order_by: Optional[str] = None) -> List[T]:
        """
        Get all records from the table.

        Args:
            order_by: ORDER BY clause (default: the repository's default_order)

        Returns:
            List of model instances
        """
        order = order_by or self.default_order
        with self.pool.get_connection() as conn:
            rows = conn.execute(f"SELECT * FROM {self.table_name} ORDER BY {order}").fetchall()
            return [self._row_to_model(row) for row in rows]

    def get_by_id(self, id: str) -> Optional[T]:
        """
        Get a record by ID.

        Returns:
            Model instance or None if not found
        """
        with self.pool.get_connection() as conn:
            row = conn.execute(f"SELECT * FROM {self.table_name} WHERE id = ?", (id,)).fetchone()
            return self._row_to_model(row) if row else None

    def add(self, model: T) -> bool:
        """
        Add a new record.

        Returns:
            True if successful, False otherwise
        """
        try:
            with self.pool.transaction() as conn:
                conn.execute(self._get_insert_sql(), self._model_to_insert_tuple(model))
            return True
        except Exception as e:
            logger.error(f"Error adding {self.table_name} record: {e}")
            return False

    def update(self, model: T) -> bool:
        """
        Replace an existing record.

        Returns:
            True if a row was updated, False otherwise
        """
        try:
            with self.pool.transaction() as conn:
                cursor = conn.execute(self._get_update_sql(), self._model_to_update_tuple(model))
            return cursor.rowcount > 0
        except Exception as e:
            logger.error(f"Error updating {self.table_name} record: {e}")
            return False

    def delete(self, id: str) -> bool:
        """
        Delete a record by ID. Deleting a missing record is not an error.

        Returns:
            True if successful, False otherwise
        """
        try:
            with self.pool.transaction() as conn:
                conn.execute(f"DELETE FROM {self.table_name} WHERE id = ?", (id,))
            return True
        except Exception as e:
            logger.error(f"Error deleting {self.table_name} record: {e}")
            return False

    def exists(self, id: str) -> bool:
        """Check if a record exists."""
        with self.pool.get_connection() as conn:
            row = conn.execute(
                f"SELECT 1 FROM {self.table_name} WHERE id = ? LIMIT 1", (id,)
            ).fetchone()
            return row is not None

    def count(self) -> int:
        """Count all records in the table."""
        with self.pool.get_connection() as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {self.table_name}").fetchone()[0]
