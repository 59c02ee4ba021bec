"""SQLite implementation of the ordered track store.

Every mutation runs in one ``BEGIN IMMEDIATE`` transaction. Because SQLite
checks the unique ``(playlist_id, position)`` index row by row, range shifts
park the affected rows in a disjoint negative range first and then write
their final positions.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

import aiosqlite

from playlist_engine.domain.playlist.entities import Track, TrackDraft
from playlist_engine.domain.playlist.repository import TrackRepository
from playlist_engine.domain.playlist.services import OrderingService, VoteOrderingService
from playlist_engine.domain.playlist.value_objects import (
    DeleteOutcome,
    MoveOutcome,
    TrackStatus,
    VoteOutcome,
)
from playlist_engine.domain.shared.constants import OrderingConstants
from playlist_engine.domain.shared.datetime_utils import from_db, to_db
from playlist_engine.domain.shared.exceptions import ConflictError, EntityNotFoundError
from playlist_engine.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)

_TRACK_COLUMNS = (
    "id, playlist_id, title, artist, provider, provider_track_id, thumbnail_url, "
    "duration_ms, position, vote_count, status, created_at"
)

_PARK_RANGE = """
    UPDATE tracks SET position = -position - ?
    WHERE playlist_id = ? AND position BETWEEN ? AND ?
"""

_UNPARK = """
    UPDATE tracks SET position = -position - ? + ?
    WHERE playlist_id = ? AND position <= ?
"""


async def shift_positions(
    conn: aiosqlite.Connection, playlist_id: str, low: int, high: int, delta: int
) -> None:
    """Add ``delta`` to every position in ``[low, high]`` without transient collisions."""
    if low > high:
        return
    offset = OrderingConstants.PARK_OFFSET
    await conn.execute(_PARK_RANGE, (offset, playlist_id, low, high))
    await conn.execute(_UNPARK, (offset, delta, playlist_id, -offset))


def _row_to_track(row: aiosqlite.Row | dict[str, Any]) -> Track:
    return Track(
        id=row["id"],
        playlist_id=row["playlist_id"],
        title=row["title"],
        artist=row["artist"] or "",
        provider=row["provider"],
        provider_track_id=row["provider_track_id"],
        thumbnail_url=row["thumbnail_url"],
        duration_ms=row["duration_ms"] or 0,
        position=row["position"],
        vote_count=row["vote_count"],
        status=TrackStatus(row["status"]),
        created_at=from_db(row["created_at"]),
    )


class SQLiteTrackRepository(TrackRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def insert(self, playlist_id: str, draft: TrackDraft, *, created_at: datetime) -> Track:
        async with self._db.transaction() as conn:
            await self._require_playlist(conn, playlist_id)

            cursor = await conn.execute(
                "SELECT COUNT(*) FROM tracks WHERE playlist_id = ?", (playlist_id,)
            )
            row = await cursor.fetchone()
            position = row[0] if row else 0

            track = draft.to_track(playlist_id=playlist_id, position=position, created_at=created_at)
            await conn.execute(
                f"""
                INSERT INTO tracks ({_TRACK_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    track.id,
                    track.playlist_id,
                    track.title,
                    track.artist,
                    track.provider,
                    track.provider_track_id,
                    track.thumbnail_url,
                    track.duration_ms,
                    track.position,
                    track.vote_count,
                    track.status.value,
                    to_db(track.created_at),
                ),
            )

        logger.info(LogTemplates.TRACK_INSERTED, track.id, playlist_id, position)
        return track

    async def get(self, playlist_id: str, track_id: str) -> Track | None:
        row = await self._db.fetch_one(
            f"SELECT {_TRACK_COLUMNS} FROM tracks WHERE id = ? AND playlist_id = ?",
            (track_id, playlist_id),
        )
        return _row_to_track(row) if row else None

    async def list_for_playlist(self, playlist_id: str) -> list[Track]:
        rows = await self._db.fetch_all(
            f"SELECT {_TRACK_COLUMNS} FROM tracks WHERE playlist_id = ? ORDER BY position",
            (playlist_id,),
        )
        return [_row_to_track(row) for row in rows]

    async def delete(self, playlist_id: str, track_id: str) -> DeleteOutcome:
        async with self._db.transaction() as conn:
            position, status = await self._require_track(conn, playlist_id, track_id)

            stopped_playback = False
            if status == TrackStatus.PLAYING:
                cursor = await conn.execute(
                    """
                    UPDATE playlists SET current_track_id = NULL, playing_started_at = NULL
                    WHERE id = ? AND current_track_id = ?
                    """,
                    (playlist_id, track_id),
                )
                stopped_playback = cursor.rowcount > 0

            cursor = await conn.execute(
                "SELECT COALESCE(MAX(position), -1) FROM tracks WHERE playlist_id = ?",
                (playlist_id,),
            )
            row = await cursor.fetchone()
            last_position = row[0] if row else -1

            await conn.execute("DELETE FROM tracks WHERE id = ?", (track_id,))
            await shift_positions(conn, playlist_id, position + 1, last_position, -1)

        logger.info(LogTemplates.TRACK_DELETED, track_id, playlist_id, position)
        if stopped_playback:
            logger.info(LogTemplates.PLAYBACK_STOPPED_ON_DELETE, track_id, playlist_id)
        return DeleteOutcome(track_id=track_id, position=position, stopped_playback=stopped_playback)

    async def move(self, playlist_id: str, track_id: str, new_position: int) -> MoveOutcome:
        async with self._db.transaction() as conn:
            current, status = await self._require_track(conn, playlist_id, track_id)

            cursor = await conn.execute(
                """
                SELECT COUNT(*) AS total,
                       MIN(CASE WHEN status = 'queued' THEN position END) AS first_queued
                FROM tracks WHERE playlist_id = ?
                """,
                (playlist_id,),
            )
            row = await cursor.fetchone()
            total = row["total"] if row else 0
            if total <= 0:
                raise ConflictError("move", ErrorMessages.MOVE_ON_EMPTY_PLAYLIST)

            target = OrderingService.clamp_move_target(
                new_position,
                total=total,
                is_queued=status == TrackStatus.QUEUED,
                first_queued_position=row["first_queued"],
            )

            shift = OrderingService.shift_range(current, target)
            if shift is not None:
                low, high, delta = shift
                await conn.execute(
                    "UPDATE tracks SET position = ? WHERE id = ?",
                    (OrderingConstants.MOVING_SLOT, track_id),
                )
                await shift_positions(conn, playlist_id, low, high, delta)
                await conn.execute(
                    "UPDATE tracks SET position = ? WHERE id = ?", (target, track_id)
                )

        outcome = MoveOutcome(track_id=track_id, from_position=current, to_position=target)
        if outcome.is_noop:
            logger.debug(LogTemplates.TRACK_MOVE_NOOP, track_id, playlist_id, current)
        else:
            logger.info(LogTemplates.TRACK_MOVED, track_id, playlist_id, current, target)
        return outcome

    async def cast_vote(
        self,
        playlist_id: str,
        track_id: str,
        user_id: str,
        *,
        allow_repeat: bool,
        voted_at: datetime,
    ) -> VoteOutcome:
        async with self._db.transaction() as conn:
            await self._require_track(conn, playlist_id, track_id)

            if not allow_repeat:
                cursor = await conn.execute(
                    """
                    INSERT OR IGNORE INTO track_votes (track_id, user_id, created_at)
                    VALUES (?, ?, ?)
                    """,
                    (track_id, user_id, to_db(voted_at)),
                )
                if cursor.rowcount == 0:
                    vote_count, status = await self._read_votes(conn, track_id)
                    logger.info(LogTemplates.VOTE_DUPLICATE_IGNORED, user_id, track_id)
                    return VoteOutcome(
                        track_id=track_id, vote_count=vote_count, status=status, counted=False
                    )

            await conn.execute(
                "UPDATE tracks SET vote_count = vote_count + 1 WHERE id = ?", (track_id,)
            )
            vote_count, status = await self._read_votes(conn, track_id)

            reordered = False
            if status == TrackStatus.QUEUED:
                await self._reorder_queued(conn, playlist_id)
                reordered = True

        logger.info(LogTemplates.VOTE_CAST, track_id, playlist_id, vote_count)
        return VoteOutcome(
            track_id=track_id, vote_count=vote_count, status=status, reordered=reordered
        )

    async def _reorder_queued(self, conn: aiosqlite.Connection, playlist_id: str) -> None:
        cursor = await conn.execute(
            f"""
            SELECT {_TRACK_COLUMNS} FROM tracks
            WHERE playlist_id = ? AND status = 'queued'
            ORDER BY position
            """,
            (playlist_id,),
        )
        queued = [_row_to_track(row) for row in await cursor.fetchall()]
        if not queued:
            return

        cursor = await conn.execute(
            """
            SELECT COALESCE(MAX(position) + 1, 0) FROM tracks
            WHERE playlist_id = ? AND status != 'queued'
            """,
            (playlist_id,),
        )
        row = await cursor.fetchone()
        start = row[0] if row else 0

        ranked = VoteOrderingService.rank(queued)
        assignments = VoteOrderingService.assign_positions(ranked, start)

        await conn.execute(
            """
            UPDATE tracks SET position = -position - ?
            WHERE playlist_id = ? AND status = 'queued'
            """,
            (OrderingConstants.PARK_OFFSET, playlist_id),
        )
        await conn.executemany(
            "UPDATE tracks SET position = ? WHERE id = ?",
            [(position, track.id) for track, position in assignments],
        )
        logger.debug(LogTemplates.QUEUE_REORDERED, len(assignments), playlist_id, start)

    @staticmethod
    async def _read_votes(conn: aiosqlite.Connection, track_id: str) -> tuple[int, TrackStatus]:
        cursor = await conn.execute(
            "SELECT vote_count, status FROM tracks WHERE id = ?", (track_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            raise EntityNotFoundError("Track", track_id)
        return row["vote_count"], TrackStatus(row["status"])

    @staticmethod
    async def _require_playlist(conn: aiosqlite.Connection, playlist_id: str) -> None:
        cursor = await conn.execute("SELECT 1 FROM playlists WHERE id = ?", (playlist_id,))
        if await cursor.fetchone() is None:
            raise EntityNotFoundError("Playlist", playlist_id)

    @staticmethod
    async def _require_track(
        conn: aiosqlite.Connection, playlist_id: str, track_id: str
    ) -> tuple[int, TrackStatus]:
        cursor = await conn.execute(
            "SELECT position, status FROM tracks WHERE id = ? AND playlist_id = ?",
            (track_id, playlist_id),
        )
        row = await cursor.fetchone()
        if row is None:
            raise EntityNotFoundError("Track", track_id)
        return row["position"], TrackStatus(row["status"])
