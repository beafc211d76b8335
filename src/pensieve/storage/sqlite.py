"""SQLite history store.

Provides persistent thought storage using a SQLite database.
Uses aiosqlite for async access.
"""

from pathlib import Path

import aiosqlite

from ..thoughts import TimestampedThought
from .base import HistoryStore


class SQLiteHistoryStore(HistoryStore):
    """SQLite-backed history store.

    Thoughts are kept with an explicit position (0 = newest) so the
    newest-first order survives equal timestamps. Every write rewrites the
    table inside one transaction.
    """

    def __init__(self, path: str | Path = "./thoughts.db"):
        super().__init__()
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._create_schema()

    async def _create_schema(self) -> None:
        """Create database tables."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS thoughts (
                position INTEGER PRIMARY KEY,
                thought TEXT NOT NULL,
                time INTEGER NOT NULL
            )
        """)

        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS settings (
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
            raise RuntimeError("SQLite history store is not connected")
        return self._connection

    async def load_history(self) -> list[TimestampedThought]:
        conn = self._require_connection()

        async with conn.execute(
            "SELECT thought, time FROM thoughts ORDER BY position ASC"
        ) as cursor:
            rows = await cursor.fetchall()

        history = []
        for thought, time in rows:
            try:
                history.append(TimestampedThought(thought=thought, created_at=time))
            except ValueError:
                self._debug("warning", "Skipped malformed thought row")
        return history

    async def write_history(self, history: list[TimestampedThought]) -> None:
        conn = self._require_connection()

        await conn.execute("DELETE FROM thoughts")
        await conn.executemany(
            "INSERT INTO thoughts (position, thought, time) VALUES (?, ?, ?)",
            [
                (position, item.thought, item.created_at)
                for position, item in enumerate(history)
            ]
        )
        await conn.commit()

    async def purge(self) -> None:
        conn = self._require_connection()
        await conn.execute("DELETE FROM thoughts")
        await conn.execute("DELETE FROM settings WHERE key = 'color'")
        await conn.commit()

    async def load_color(self) -> str | None:
        conn = self._require_connection()
        async with conn.execute(
            "SELECT value FROM settings WHERE key = 'color'"
        ) as cursor:
            row = await cursor.fetchone()
        return row[0] if row and row[0] else None

    async def save_color(self, color: str) -> None:
        conn = self._require_connection()
        await conn.execute("""
            INSERT INTO settings (key, value) VALUES ('color', ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """, (color,))
        await conn.commit()

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
