"""
Connection Pool Module - Pooled SQLite connections for the theme library.

Provides:
- ConnectionPool: Reusable connections to the library database
- Transaction context manager for atomic writes
"""
import sqlite3
import queue
import threading
from pathlib import Path
from contextlib import contextmanager
import logging

logger = logging.getLogger(__name__)


class ConnectionPool:
    """
    SQLite connection pool.

    Usage:
        pool = ConnectionPool(db_path, max_connections=3)

        with pool.get_connection() as conn:
            conn.execute("SELECT * FROM saved_themes")

        with pool.transaction() as conn:
            conn.execute("DELETE FROM saved_themes WHERE id = ?", (theme_id,))
            # Commit on success, rollback on exception
    """

    def __init__(self, db_path: Path, max_connections: int = 3):
        """
        Initialize the connection pool.

        Args:
            db_path: Path to SQLite database file
            max_connections: Maximum number of connections to keep in pool
        """
        self.db_path = db_path
        self.max_connections = max_connections
        self._pool: queue.Queue = queue.Queue(maxsize=max_connections)
        self._lock = threading.Lock()
        self._created_count = 0

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new database connection with standard settings."""
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    def _is_alive(self, conn: sqlite3.Connection) -> bool:
        try:
            conn.execute("SELECT 1")
            return True
        except sqlite3.Error:
            return False

    def _acquire(self) -> sqlite3.Connection:
        try:
            conn = self._pool.get_nowait()
            if self._is_alive(conn):
                return conn
            with self._lock:
                self._created_count -= 1
        except queue.Empty:
            pass

        with self._lock:
            if self._created_count < self.max_connections:
                self._created_count += 1
                logger.debug(f"Opening library connection ({self._created_count}/{self.max_connections})")
                return self._create_connection()

        # All connections are busy, wait for one to come back
        return self._pool.get(timeout=30)

    @contextmanager
    def get_connection(self):
        """
        Borrow a connection, returned to the pool on exit.

        Yields:
            sqlite3.Connection: Database connection
        """
        conn = self._acquire()
        try:
            yield conn
        finally:
            try:
                self._pool.put_nowait(conn)
            except queue.Full:
                conn.close()
                with self._lock:
                    self._created_count -= 1

    @contextmanager
    def transaction(self):
        """
        Borrow a connection inside a transaction.

        Commits on successful exit, rolls back on exception.

        Yields:
            sqlite3.Connection: Database connection
        """
        with self.get_connection() as conn:
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    def close_all(self):
        """Close all idle connections in the pool."""
        while True:
            try:
                conn = self._pool.get_nowait()
            except queue.Empty:
                break
            conn.close()

        with self._lock:
            self._created_count = 0

        logger.debug("Closed all library connections")
