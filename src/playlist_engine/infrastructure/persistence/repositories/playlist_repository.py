"""SQLite implementation of PlaylistRepository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from playlist_engine.domain.playlist.entities import Playlist
from playlist_engine.domain.playlist.repository import PlaylistRepository
from playlist_engine.domain.playlist.value_objects import EditMode
from playlist_engine.domain.shared.datetime_utils import from_db, to_db, utcnow
from playlist_engine.domain.shared.exceptions import EntityNotFoundError
from playlist_engine.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)

_PLAYLIST_COLUMNS = (
    "id, owner_id, name, description, is_public, edit_mode, "
    "current_track_id, playing_started_at, created_at"
)
_PREFIXED_COLUMNS = ", ".join(f"p.{c.strip()}" for c in _PLAYLIST_COLUMNS.split(","))


def row_to_playlist(row: dict[str, Any]) -> Playlist:
    return Playlist(
        id=row["id"],
        owner_id=row["owner_id"],
        name=row["name"],
        description=row["description"] or "",
        is_public=bool(row["is_public"]),
        edit_mode=EditMode(row["edit_mode"]),
        current_track_id=row["current_track_id"],
        playing_started_at=from_db(row["playing_started_at"]),
        created_at=from_db(row["created_at"]),
    )


class SQLitePlaylistRepository(PlaylistRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def create(self, playlist: Playlist) -> Playlist:
        await self._db.execute(
            f"""
            INSERT INTO playlists ({_PLAYLIST_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, NULL, NULL, ?)
            """,
            (
                playlist.id,
                playlist.owner_id,
                playlist.name,
                playlist.description,
                int(playlist.is_public),
                playlist.edit_mode.value,
                to_db(playlist.created_at),
            ),
        )
        logger.info(LogTemplates.PLAYLIST_CREATED, playlist.id, playlist.owner_id)
        return playlist.model_copy(update={"current_track_id": None, "playing_started_at": None})

    async def get(self, playlist_id: str) -> Playlist | None:
        row = await self._db.fetch_one(
            f"SELECT {_PLAYLIST_COLUMNS} FROM playlists WHERE id = ?", (playlist_id,)
        )
        return row_to_playlist(row) if row else None

    async def list_visible(self, user_id: str | None, limit: int) -> list[Playlist]:
        rows = await self._db.fetch_all(
            f"""
            SELECT {_PREFIXED_COLUMNS}
            FROM playlists p
            LEFT JOIN playlist_members pm ON pm.playlist_id = p.id AND pm.user_id = ?
            WHERE p.is_public = 1
               OR (? IS NOT NULL AND p.owner_id = ?)
               OR pm.user_id IS NOT NULL
            ORDER BY p.created_at DESC, p.id
            LIMIT ?
            """,
            (user_id, user_id, user_id, limit),
        )
        return [row_to_playlist(row) for row in rows]

    async def update_details(self, playlist: Playlist) -> Playlist:
        async with self._db.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE playlists
                SET name = ?, description = ?, is_public = ?, edit_mode = ?
                WHERE id = ?
                """,
                (
                    playlist.name,
                    playlist.description,
                    int(playlist.is_public),
                    playlist.edit_mode.value,
                    playlist.id,
                ),
            )
            if cursor.rowcount == 0:
                raise EntityNotFoundError("Playlist", playlist.id)

            cursor = await conn.execute(
                f"SELECT {_PLAYLIST_COLUMNS} FROM playlists WHERE id = ?", (playlist.id,)
            )
            row = await cursor.fetchone()

        logger.info(LogTemplates.PLAYLIST_UPDATED, playlist.id)
        return row_to_playlist(dict(row))

    async def is_member(self, playlist_id: str, user_id: str) -> bool:
        row = await self._db.fetch_one(
            "SELECT 1 AS found FROM playlist_members WHERE playlist_id = ? AND user_id = ?",
            (playlist_id, user_id),
        )
        return row is not None

    async def add_member(self, playlist_id: str, user_id: str) -> bool:
        async with self._db.transaction() as conn:
            cursor = await conn.execute("SELECT 1 FROM playlists WHERE id = ?", (playlist_id,))
            if await cursor.fetchone() is None:
                raise EntityNotFoundError("Playlist", playlist_id)

            cursor = await conn.execute(
                """
                INSERT OR IGNORE INTO playlist_members (playlist_id, user_id, created_at)
                VALUES (?, ?, ?)
                """,
                (playlist_id, user_id, to_db(utcnow())),
            )
            created = cursor.rowcount > 0

        if created:
            logger.info(LogTemplates.MEMBER_INVITED, user_id, playlist_id)
        return created

    async def remove_member(self, playlist_id: str, user_id: str) -> bool:
        cursor = await self._db.execute(
            "DELETE FROM playlist_members WHERE playlist_id = ? AND user_id = ?",
            (playlist_id, user_id),
        )
        removed = cursor.rowcount > 0
        if removed:
            logger.info(LogTemplates.MEMBER_REMOVED, user_id, playlist_id)
        return removed

    async def list_members(self, playlist_id: str) -> list[str]:
        rows = await self._db.fetch_all(
            """
            SELECT user_id FROM playlist_members
            WHERE playlist_id = ?
            ORDER BY created_at, user_id
            """,
            (playlist_id,),
        )
        return [row["user_id"] for row in rows]
