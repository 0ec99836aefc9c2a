"""DuckDB key-value storage for Vetria.

One flat table holds every persisted blob. Each ``set`` replaces the value of
a single key in one statement, so a reader never sees a half written blob,
but there is no transaction spanning several keys.
"""

import logging
from pathlib import Path
from typing import Optional

import duckdb

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class KeyValueStoreError(RuntimeError):
    """Raised when the underlying database rejects a read or write."""


class DuckDBKeyValueStore:
    """Durable ``key -> bytes`` mapping backed by a DuckDB file."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or IN_MEMORY
        self.conn: Optional[duckdb.DuckDBPyConnection] = None

    def open(self) -> "DuckDBKeyValueStore":
        """Connect to the database file and create the table if needed."""
        if self.conn is not None:
            return self

        if self.db_path != IN_MEMORY:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self.conn = duckdb.connect(self.db_path)
            self._create_schema()
        except duckdb.Error as e:
            self.conn = None
            raise KeyValueStoreError(f"Failed to open {self.db_path}: {e}") from e
        logger.info(f"Key-value store opened: {self.db_path}")
        return self

    def _create_schema(self) -> None:
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS kv_entries (
                key VARCHAR PRIMARY KEY,
                value BLOB NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    def _connection(self) -> duckdb.DuckDBPyConnection:
        if self.conn is None:
            self.open()
        return self.conn

    def get(self, key: str) -> Optional[bytes]:
        """Return the stored blob for ``key`` or None when absent."""
        try:
            row = self._connection().execute(
                "SELECT value FROM kv_entries WHERE key = ?", (key,)
            ).fetchone()
        except duckdb.Error as e:
            raise KeyValueStoreError(f"Failed to read '{key}': {e}") from e

        if row is None:
            return None
        return bytes(row[0])

    def set(self, key: str, value: bytes) -> None:
        """Replace the blob stored under ``key``."""
        try:
            self._connection().execute(
                """
                INSERT INTO kv_entries (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT (key) DO UPDATE
                SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value),
            )
        except duckdb.Error as e:
            raise KeyValueStoreError(f"Failed to write '{key}': {e}") from e

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None
            logger.info(f"Key-value store closed: {self.db_path}")
