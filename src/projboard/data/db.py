"""Local SQLite storage for accounts and projects (aiosqlite)."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from types import TracebackType
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL DEFAULT '',
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL CHECK (length(name) > 0),
    status TEXT NOT NULL CHECK (status IN ('ACTIVE', 'ON_HOLD', 'COMPLETED')),
    deadline TEXT NOT NULL,
    assigned_team_member TEXT NOT NULL DEFAULT '',
    budget REAL NOT NULL DEFAULT 0 CHECK (budget >= 0),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_projects_status ON projects(status);
CREATE INDEX IF NOT EXISTS idx_projects_created ON projects(created_at);
"""

# Dropped in this order when the stored schema version is stale.
_TABLES = ("projects", "users")

_PRAGMAS = ("journal_mode=WAL", "foreign_keys=ON")


class Database:
    """One aiosqlite connection holding the ``users`` and ``projects`` tables.

    Use as ``async with Database(path) as db:`` or call :meth:`connect` and
    :meth:`close` explicitly. ``Path(":memory:")`` gives a throwaway database.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn: aiosqlite.Connection | None = None
        # Writers share one connection, so a rollback must never reach another
        # writer's uncommitted statement.
        self._write_lock = asyncio.Lock()

    @property
    def in_memory(self) -> bool:
        return str(self._db_path) == ":memory:"

    async def connect(self) -> Database:
        if not self.in_memory:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = await aiosqlite.connect(str(self._db_path))
        self._conn.row_factory = aiosqlite.Row
        for pragma in _PRAGMAS:
            await self._conn.execute(f"PRAGMA {pragma}")
        await self._migrate()
        await self._conn.commit()
        logger.debug("Opened project database at %s", self._db_path)
        return self

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def __aenter__(self) -> Database:
        return await self.connect()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            msg = f"Database {self._db_path} is not connected"
            raise RuntimeError(msg)
        return self._conn

    async def fetch_all(self, sql: str, params: tuple[Any, ...] = ()) -> list[aiosqlite.Row]:
        cursor = await self.conn.execute(sql, params)
        return await cursor.fetchall()  # type: ignore[return-value]

    async def fetch_one(self, sql: str, params: tuple[Any, ...] = ()) -> aiosqlite.Row | None:
        cursor = await self.conn.execute(sql, params)
        return await cursor.fetchone()  # type: ignore[return-value]

    async def write(self, sql: str, params: tuple[Any, ...] = ()) -> int:
        """Run one statement in its own transaction; returns the affected row count.

        Writes are serialized. The transaction is rolled back and the
        ``aiosqlite.Error`` re-raised if the statement or the commit fails.
        """
        conn = self.conn
        async with self._write_lock:
            try:
                cursor = await conn.execute(sql, params)
                await conn.commit()
            except aiosqlite.Error:
                await conn.rollback()
                raise
            return cursor.rowcount

    async def _stored_version(self) -> int:
        row = await self.fetch_one("SELECT value FROM app_meta WHERE key = 'schema_version'")
        if row is None or not str(row["value"]).isdigit():
            return 0
        return int(row["value"])

    async def _migrate(self) -> None:
        await self.conn.execute(
            "CREATE TABLE IF NOT EXISTS app_meta (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
        )
        stored = await self._stored_version()
        if stored != SCHEMA_VERSION:
            logger.info("Rebuilding project tables (schema %s -> %s)", stored, SCHEMA_VERSION)
            for table in _TABLES:
                await self.conn.execute(f"DROP TABLE IF EXISTS {table}")
            await self.conn.execute(
                "INSERT OR REPLACE INTO app_meta (key, value) VALUES ('schema_version', ?)",
                (str(SCHEMA_VERSION),),
            )
        await self.conn.executescript(SCHEMA_SQL)
