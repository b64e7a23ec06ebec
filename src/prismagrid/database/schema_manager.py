"""
Schema Manager Module - Theme library schema initialization and migrations.

Handles:
- CREATE TABLE statements
- Index creation
- Schema version bookkeeping (PRAGMA user_version)
"""
import sqlite3
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


class SchemaManager:
    """
    Manages the SQLite schema of the theme library database.

    Call initialize() once before the repositories are used. It is safe to
    call on an existing database.
    """

    # Current schema version (increment when adding migrations)
    SCHEMA_VERSION = 1

    def __init__(self, db_path: Path):
        """
        Initialize schema manager.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)

    def _get_connection(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def initialize(self):
        """Create missing tables and apply pending migrations."""
        conn = self._get_connection()
        try:
            self._init_database(conn)
            self._migrate_database(conn)
            conn.commit()
        finally:
            conn.close()

    def _init_database(self, conn: sqlite3.Connection):
        """Create tables and indexes."""
        # config holds the camelCase JSON configuration shape
        conn.execute("""
            CREATE TABLE IF NOT EXISTS saved_themes (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT,
                config TEXT NOT NULL,
                created_at INTEGER NOT NULL
            )
        """)
        conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_saved_themes_created_at
            ON saved_themes(created_at)
        """)

    def _migrate_database(self, conn: sqlite3.Connection):
        """Bring an older database up to SCHEMA_VERSION."""
        version = conn.execute("PRAGMA user_version").fetchone()[0]
        if version > self.SCHEMA_VERSION:
            logger.warning(
                f"Theme library schema v{version} is newer than supported v{self.SCHEMA_VERSION}"
            )
            return
        if version < self.SCHEMA_VERSION:
            conn.execute(f"PRAGMA user_version = {self.SCHEMA_VERSION}")
            logger.info(f"Theme library schema migrated v{version} -> v{self.SCHEMA_VERSION}")

    def get_version(self) -> int:
        """Return the schema version stored in the database."""
        conn = self._get_connection()
        try:
            return conn.execute("PRAGMA user_version").fetchone()[0]
        finally:
            conn.close()
