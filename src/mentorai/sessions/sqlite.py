"""SQLite session store.

Provides persistent session storage in a SQLite database file.
Uses aiosqlite for async access.
"""

from pathlib import Path

import aiosqlite

from ..errors import SessionStoreError
from .base import DEFAULT_STORAGE_KEY, SessionStore


class SQLiteSessionStore(SessionStore):
    """SQLite-backed session store.

    Stores the serialized collection as one row of a key-value table.
    """

    def __init__(
        self,
        path: str | Path = "~/.mentorai/sessions.db",
        key: str = DEFAULT_STORAGE_KEY
    ):
        super().__init__(key)
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        if self._connection is not None:
            return
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._db_path)
            await self._create_schema()
        except (OSError, aiosqlite.Error) as e:
            raise SessionStoreError(f"Cannot open {self._db_path}: {e}") from e

    async def _create_schema(self) -> None:
        """Create the key-value table."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise SessionStoreError("SQLite session store is not connected")
        return self._connection

    async def _read(self) -> str | None:
        conn = self._require_connection()
        try:
            async with conn.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (self._key,)
            ) as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot read from {self._db_path}: {e}") from e
        return row[0] if row else None

    async def _write(self, value: str) -> None:
        conn = self._require_connection()
        try:
            await conn.execute("""
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """, (self._key, value))
            await conn.commit()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot write to {self._db_path}: {e}") from e

    async def _remove(self) -> None:
        conn = self._require_connection()
        try:
            await conn.execute("DELETE FROM kv_store WHERE key = ?", (self._key,))
            await conn.commit()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot delete from {self._db_path}: {e}") from e

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
