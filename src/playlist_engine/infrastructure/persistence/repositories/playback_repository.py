"""SQLite persistence for the playback state machine."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

import aiosqlite

from playlist_engine.domain.playlist.repository import PlaybackRepository
from playlist_engine.domain.playlist.value_objects import (
    AdvanceOutcome,
    DueAdvancement,
    PlayerState,
)
from playlist_engine.domain.shared.datetime_utils import from_db, to_db
from playlist_engine.domain.shared.exceptions import EntityNotFoundError
from playlist_engine.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLitePlaybackRepository(PlaybackRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def advance(
        self,
        playlist_id: str,
        *,
        now: datetime,
        expected_track_id: str | None = None,
    ) -> AdvanceOutcome:
        async with self._db.transaction() as conn:
            current = await self._read_state(conn, playlist_id)

            if expected_track_id is not None and current.current_track_id != expected_track_id:
                logger.debug(LogTemplates.PLAYBACK_ALREADY_ADVANCED, playlist_id, expected_track_id)
                return AdvanceOutcome(state=current, changed=False)

            # Retire every playing row, not only current_track_id, so at most
            # one track can ever be playing after this transaction.
            await conn.execute(
                "UPDATE tracks SET status = 'played' WHERE playlist_id = ? AND status = 'playing'",
                (playlist_id,),
            )

            cursor = await conn.execute(
                """
                SELECT id FROM tracks
                WHERE playlist_id = ? AND status = 'queued'
                ORDER BY position
                LIMIT 1
                """,
                (playlist_id,),
            )
            row = await cursor.fetchone()

            if row is None:
                await conn.execute(
                    """
                    UPDATE playlists SET current_track_id = NULL, playing_started_at = NULL
                    WHERE id = ?
                    """,
                    (playlist_id,),
                )
                state = PlayerState.stopped(playlist_id)
            else:
                next_track_id = row["id"]
                await conn.execute(
                    "UPDATE tracks SET status = 'playing' WHERE id = ?", (next_track_id,)
                )
                await conn.execute(
                    """
                    UPDATE playlists SET current_track_id = ?, playing_started_at = ?
                    WHERE id = ?
                    """,
                    (next_track_id, to_db(now), playlist_id),
                )
                state = PlayerState(
                    playlist_id=playlist_id,
                    current_track_id=next_track_id,
                    playing_started_at=now,
                )

        if state.is_playing:
            logger.info(LogTemplates.PLAYBACK_ADVANCED, playlist_id, state.current_track_id)
        else:
            logger.info(LogTemplates.PLAYBACK_STOPPED, playlist_id)
        return AdvanceOutcome(state=state)

    async def get_state(self, playlist_id: str) -> PlayerState:
        async with self._db.connection() as conn:
            return await self._read_state(conn, playlist_id)

    async def list_due(self, now: datetime) -> list[DueAdvancement]:
        # Elapsed time is rounded to whole milliseconds so the boundary
        # started_at + duration == now counts as due.
        rows = await self._db.fetch_all(
            """
            SELECT p.id AS playlist_id, t.id AS track_id,
                   p.playing_started_at, t.duration_ms
            FROM playlists p
            JOIN tracks t ON t.id = p.current_track_id
            WHERE t.status = 'playing'
              AND t.duration_ms > 0
              AND p.playing_started_at IS NOT NULL
              AND CAST(ROUND((julianday(?) - julianday(p.playing_started_at)) * 86400000)
                       AS INTEGER) >= t.duration_ms
            """,
            (to_db(now),),
        )
        return [
            DueAdvancement(
                playlist_id=row["playlist_id"],
                track_id=row["track_id"],
                playing_started_at=from_db(row["playing_started_at"]),
                duration_ms=row["duration_ms"],
            )
            for row in rows
        ]

    @staticmethod
    async def _read_state(conn: aiosqlite.Connection, playlist_id: str) -> PlayerState:
        cursor = await conn.execute(
            "SELECT current_track_id, playing_started_at FROM playlists WHERE id = ?",
            (playlist_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            raise EntityNotFoundError("Playlist", playlist_id)
        return PlayerState(
            playlist_id=playlist_id,
            current_track_id=row["current_track_id"],
            playing_started_at=from_db(row["playing_started_at"]),
        )
