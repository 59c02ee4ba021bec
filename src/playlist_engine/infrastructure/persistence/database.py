"""SQLite database with per-operation connections and WAL mode."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import aiosqlite

from playlist_engine.domain.shared.constants import (
    DatabaseTables,
    DatabaseURLSchemes,
    SQLPragmas,
    SQLStatements,
)
from playlist_engine.domain.shared.exceptions import PersistenceError
from playlist_engine.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ...config.settings import DatabaseSettings

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str, settings: DatabaseSettings | None = None) -> None:
        if url.startswith(DatabaseURLSchemes.SQLITE_FILE):
            self._db_path = url[len(DatabaseURLSchemes.SQLITE_FILE) :]
        else:
            self._db_path = url

        self._initialized = False
        self._keepalive_conn: aiosqlite.Connection | None = None
        self._memory_uri = f"file:playlist-engine-{uuid4().hex}?mode=memory&cache=shared"
        self._busy_timeout = settings.busy_timeout_ms if settings else 5000
        self._connection_timeout = settings.connection_timeout_s if settings else 10

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def is_memory(self) -> bool:
        return self._db_path == DatabaseURLSchemes.MEMORY

    async def initialize(self) -> None:
        if self._initialized:
            return

        if not self.is_memory:
            db_dir = Path(self._db_path).parent
            db_dir.mkdir(parents=True, exist_ok=True)

        # Keep one connection alive for in-memory DBs; otherwise the shared
        # in-memory DB is destroyed once the last connection closes.
        if self.is_memory and self._keepalive_conn is None:
            self._keepalive_conn = await self._connect()

        async with self.transaction() as conn:
            await self._ensure_schema(conn)

        self._initialized = True
        logger.info(LogTemplates.DATABASE_INITIALIZED, self._db_path)

    async def _ensure_schema(self, conn: aiosqlite.Connection) -> None:
        # playlists.current_track_id references tracks declared below; SQLite
        # resolves foreign keys lazily so the forward reference is fine.
        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {DatabaseTables.PLAYLISTS} (
                id TEXT PRIMARY KEY,
                owner_id TEXT NOT NULL,
                name TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                is_public INTEGER NOT NULL DEFAULT 1,
                edit_mode TEXT NOT NULL DEFAULT 'everyone'
                    CHECK (edit_mode IN ('everyone', 'invited')),
                current_track_id TEXT REFERENCES {DatabaseTables.TRACKS}(id) ON DELETE SET NULL,
                playing_started_at TEXT,
                created_at TEXT NOT NULL
            )
            """
        )
        await conn.execute(
            f"CREATE INDEX IF NOT EXISTS idx_playlists_owner ON {DatabaseTables.PLAYLISTS}(owner_id)"
        )

        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {DatabaseTables.TRACKS} (
                id TEXT PRIMARY KEY,
                playlist_id TEXT NOT NULL
                    REFERENCES {DatabaseTables.PLAYLISTS}(id) ON DELETE CASCADE,
                title TEXT NOT NULL,
                artist TEXT NOT NULL DEFAULT '',
                provider TEXT,
                provider_track_id TEXT,
                thumbnail_url TEXT,
                duration_ms INTEGER NOT NULL DEFAULT 0,
                position INTEGER NOT NULL,
                vote_count INTEGER NOT NULL DEFAULT 0,
                status TEXT NOT NULL DEFAULT 'queued'
                    CHECK (status IN ('queued', 'playing', 'played')),
                created_at TEXT NOT NULL
            )
            """
        )
        await conn.execute(
            "CREATE UNIQUE INDEX IF NOT EXISTS idx_tracks_playlist_position "
            f"ON {DatabaseTables.TRACKS}(playlist_id, position)"
        )
        await conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_tracks_playlist_status "
            f"ON {DatabaseTables.TRACKS}(playlist_id, status)"
        )

        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {DatabaseTables.PLAYLIST_MEMBERS} (
                playlist_id TEXT NOT NULL
                    REFERENCES {DatabaseTables.PLAYLISTS}(id) ON DELETE CASCADE,
                user_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                PRIMARY KEY (playlist_id, user_id)
            )
            """
        )

        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {DatabaseTables.TRACK_VOTES} (
                track_id TEXT NOT NULL
                    REFERENCES {DatabaseTables.TRACKS}(id) ON DELETE CASCADE,
                user_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                PRIMARY KEY (track_id, user_id)
            )
            """
        )

    async def _connect(self) -> aiosqlite.Connection:
        # SQLite ":memory:" is per-connection, so use a shared URI to allow
        # multiple connections to see the same in-memory database.
        if self.is_memory:
            db_path = self._memory_uri
            uri = True
        else:
            db_path = self._db_path
            uri = False

        try:
            conn = await aiosqlite.connect(
                db_path,
                detect_types=0,
                uri=uri,
                timeout=self._connection_timeout,
                # Autocommit mode: transactions are opened explicitly by
                # transaction() so BEGIN IMMEDIATE controls locking.
                isolation_level=None,
            )
        except aiosqlite.Error as exc:
            raise PersistenceError(ErrorMessages.STORE_FAILURE.format(error=exc)) from exc

        conn.row_factory = aiosqlite.Row

        await conn.execute(SQLPragmas.JOURNAL_MODE_WAL)
        await conn.execute(SQLPragmas.FOREIGN_KEYS_ON)
        await conn.execute(SQLPragmas.BUSY_TIMEOUT.format(timeout=self._busy_timeout))

        return conn

    @asynccontextmanager
    async def connection(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """Open a dedicated connection; store errors surface as PersistenceError."""
        conn = await self._connect()
        try:
            yield conn
        except aiosqlite.Error as exc:
            raise PersistenceError(ErrorMessages.STORE_FAILURE.format(error=exc)) from exc
        finally:
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """Run the block in one ``BEGIN IMMEDIATE`` transaction.

        The write lock is held from the first statement, so concurrent
        mutations queue up behind each other (bounded by the busy timeout).
        Any exception rolls the whole transaction back.
        """
        async with self.connection() as conn:
            await conn.execute(SQLStatements.BEGIN_IMMEDIATE)
            try:
                yield conn
            except Exception as exc:
                if conn.in_transaction:
                    await conn.execute(SQLStatements.ROLLBACK)
                logger.debug(LogTemplates.TRANSACTION_ROLLED_BACK, exc)
                raise
            await conn.execute(SQLStatements.COMMIT)

    async def execute(
        self, sql: str, parameters: tuple[Any, ...] | None = None
    ) -> aiosqlite.Cursor:
        """Execute a SQL statement in its own transaction."""
        async with self.transaction() as conn:
            if parameters is not None:
                cursor = await conn.execute(sql, parameters)
            else:
                cursor = await conn.execute(sql)
            return cursor

    async def fetch_one(
        self, sql: str, parameters: tuple[Any, ...] | None = None
    ) -> dict[str, Any] | None:
        """Fetch a single row."""
        async with self.connection() as conn:
            if parameters is not None:
                cursor = await conn.execute(sql, parameters)
            else:
                cursor = await conn.execute(sql)
            row = await cursor.fetchone()
            return dict(row) if row else None

    async def fetch_all(
        self, sql: str, parameters: tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        """Fetch all rows."""
        async with self.connection() as conn:
            if parameters is not None:
                cursor = await conn.execute(sql, parameters)
            else:
                cursor = await conn.execute(sql)
            rows = await cursor.fetchall()
            return [dict(row) for row in rows]

    async def get_stats(self) -> dict[str, Any]:
        """Get database statistics.

        Returns:
            Dictionary with the database path, row counts per table and page
            metrics.
        """
        stats: dict[str, Any] = {
            "db_path": self._db_path,
            "initialized": self._initialized,
            "tables": {},
        }

        db_file = Path(self._db_path)
        if not self.is_memory and db_file.exists():
            stats["file_size_bytes"] = db_file.stat().st_size

        if not self._initialized:
            return stats

        try:
            async with self.connection() as conn:
                for table_name in (
                    DatabaseTables.PLAYLISTS,
                    DatabaseTables.TRACKS,
                    DatabaseTables.PLAYLIST_MEMBERS,
                    DatabaseTables.TRACK_VOTES,
                ):
                    cursor = await conn.execute(
                        f"SELECT COUNT(*) FROM {table_name}"  # noqa: S608
                    )
                    row = await cursor.fetchone()
                    stats["tables"][table_name] = row[0] if row else 0

                page_cursor = await conn.execute(SQLPragmas.PAGE_COUNT)
                page_count_row = await page_cursor.fetchone()
                stats["page_count"] = page_count_row[0] if page_count_row else 0

                page_size_cursor = await conn.execute(SQLPragmas.PAGE_SIZE)
                page_size_row = await page_size_cursor.fetchone()
                stats["page_size"] = page_size_row[0] if page_size_row else 0
        except PersistenceError as e:
            logger.error(LogTemplates.DATABASE_STATS_FAILED, e)
            stats["error"] = str(e)

        return stats

    async def close(self) -> None:
        """Close the database manager.

        For file-based DBs this is mostly a no-op. For in-memory DBs we also
        close the keepalive connection, which discards the data.
        """
        if self._keepalive_conn is not None:
            try:
                await self._keepalive_conn.close()
            finally:
                self._keepalive_conn = None
        self._initialized = False
        logger.info(LogTemplates.DATABASE_CLOSED)
