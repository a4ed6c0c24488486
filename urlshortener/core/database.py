"""SQLite association store.

This module keeps associations in a single SQLite table. The short id lives
in an indexed ``uuid`` column; the table's own key is SQLite's ``rowid``.
"""

import sqlite3
import logging
import threading
from typing import Optional

from .exceptions import StoreUnavailableError
from .store import AssociationStore
from ..models import URLAssociation

logger = logging.getLogger(__name__)


class SQLiteAssociationStore(AssociationStore):
    """Association store backed by an SQLite database file."""

    def __init__(self, db_path: str):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for in-memory database.
        """
        self.db_path = db_path
        self._connection: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    def _get_connection(self) -> sqlite3.Connection:
        """Create or return the database connection.

        The connection is shared by the request threads; access is
        serialized with a lock.

        Returns:
            SQLite connection.
        """
        if self._connection is None:
            try:
                self._connection = sqlite3.connect(self.db_path, check_same_thread=False)
            except sqlite3.Error as e:
                logger.error(f"Database connection failed: {e}")
                raise StoreUnavailableError(f"Cannot open database {self.db_path}") from e
            self._connection.row_factory = sqlite3.Row
        return self._connection

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def init_db(self) -> None:
        """Initialize database tables."""
        create_table_sql = """
        CREATE TABLE IF NOT EXISTS url_associations (
            uuid TEXT NOT NULL,
            url TEXT NOT NULL
        )
        """
        create_index_sql = """
        CREATE INDEX IF NOT EXISTS idx_uuid ON url_associations(uuid);
        """
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(create_table_sql)
                cursor.executescript(create_index_sql)
                conn.commit()
                logger.info("Database initialized successfully")
            except sqlite3.Error as e:
                logger.error(f"Database initialization failed: {e}")
                raise StoreUnavailableError("Database initialization failed") from e

    def execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list[dict]]:
        """Execute a SQL query.

        Args:
            query: SQL query string.
            params: Query parameters.
            fetch: Whether to fetch results.

        Returns:
            Query results if fetch=True, None otherwise.
        """
        with self._lock:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(query, params)
                if fetch:
                    results = cursor.fetchall()
                    return [dict(row) for row in results]
                conn.commit()
                return None
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                raise StoreUnavailableError("Query execution failed") from e

    def _find_rowid(self, uuid: str) -> Optional[int]:
        query = "SELECT rowid FROM url_associations WHERE uuid = ? LIMIT 1"
        results = self.execute(query, (uuid,), fetch=True)
        return results[0]["rowid"] if results else None

    def list_all(self) -> list[URLAssociation]:
        query = "SELECT uuid, url FROM url_associations"
        rows = self.execute(query, fetch=True) or []
        return [URLAssociation(**row) for row in rows]

    def find_by_id(self, uuid: str) -> Optional[URLAssociation]:
        """Get association by short id.

        Args:
            uuid: The short id.

        Returns:
            Association or None if not found.
        """
        query = "SELECT uuid, url FROM url_associations WHERE uuid = ? LIMIT 1"
        results = self.execute(query, (uuid,), fetch=True)
        return URLAssociation(**results[0]) if results else None

    def insert(self, association: URLAssociation) -> None:
        query = "INSERT INTO url_associations (uuid, url) VALUES (?, ?)"
        self.execute(query, (association.uuid, association.url))
        logger.info(f"Created short URL: {association.uuid}")

    def delete_by_id(self, uuid: str) -> bool:
        """Delete the association found for a short id.

        Args:
            uuid: The short id.

        Returns:
            True if deleted, False if not found.
        """
        rowid = self._find_rowid(uuid)
        if rowid is None:
            return False
        self.execute("DELETE FROM url_associations WHERE rowid = ?", (rowid,))
        logger.info(f"Deleted short URL: {uuid}")
        return True

    def update_target(self, uuid: str, url: str) -> bool:
        """Point an existing short id at a new URL.

        Args:
            uuid: The short id.
            url: The new target URL.

        Returns:
            True if updated, False if not found.
        """
        rowid = self._find_rowid(uuid)
        if rowid is None:
            return False
        self.execute("UPDATE url_associations SET url = ? WHERE rowid = ?", (url, rowid))
        logger.info(f"Updated URL: {uuid}")
        return True
