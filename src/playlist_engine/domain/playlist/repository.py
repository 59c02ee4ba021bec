"""
Playlist Domain Repository Interfaces

Abstract base classes defining the contracts for data persistence.
Every mutating method runs as one store transaction that is either fully
committed or fully rolled back. Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from playlist_engine.domain.playlist.entities import Playlist, Track, TrackDraft
from playlist_engine.domain.playlist.value_objects import (
    AdvanceOutcome,
    DeleteOutcome,
    DueAdvancement,
    MoveOutcome,
    PlayerState,
    VoteOutcome,
)


class PlaylistRepository(ABC):
    """Abstract repository for playlists and their invited members."""

    @abstractmethod
    async def create(self, playlist: Playlist) -> Playlist:
        """Persist a new playlist.

        Args:
            playlist: The playlist to store.

        Returns:
            The stored playlist.
        """
        ...

    @abstractmethod
    async def get(self, playlist_id: str) -> Playlist | None:
        """Retrieve a playlist by ID.

        Returns:
            The playlist if found, None otherwise.
        """
        ...

    @abstractmethod
    async def list_visible(self, user_id: str | None, limit: int) -> list[Playlist]:
        """List playlists the user may see, newest first.

        Public playlists are always included. With a user, playlists they own
        or are invited to are included as well.
        """
        ...

    @abstractmethod
    async def update_details(self, playlist: Playlist) -> Playlist:
        """Update name, description, visibility and edit mode.

        Playback columns are owned by :class:`PlaybackRepository` and are
        never written here.

        Raises:
            EntityNotFoundError: If the playlist does not exist.
        """
        ...

    @abstractmethod
    async def is_member(self, playlist_id: str, user_id: str) -> bool:
        """Check whether a user has been invited to a playlist."""
        ...

    @abstractmethod
    async def add_member(self, playlist_id: str, user_id: str) -> bool:
        """Invite a user.

        Returns:
            True if the invitation was created, False if it already existed.
        """
        ...

    @abstractmethod
    async def remove_member(self, playlist_id: str, user_id: str) -> bool:
        """Revoke an invitation.

        Returns:
            True if an invitation was removed.
        """
        ...

    @abstractmethod
    async def list_members(self, playlist_id: str) -> list[str]:
        """List invited user IDs in invitation order."""
        ...


class TrackRepository(ABC):
    """Ordered tracks of a playlist.

    Implementations must keep positions exactly ``{0..N-1}`` after every
    committed call and serialize concurrent mutations of one playlist.
    """

    @abstractmethod
    async def insert(self, playlist_id: str, draft: TrackDraft, *, created_at: datetime) -> Track:
        """Append a queued track at ``position = current count``.

        Raises:
            EntityNotFoundError: If the playlist does not exist.
        """
        ...

    @abstractmethod
    async def get(self, playlist_id: str, track_id: str) -> Track | None:
        ...

    @abstractmethod
    async def list_for_playlist(self, playlist_id: str) -> list[Track]:
        """Return the playlist's tracks ordered by position."""
        ...

    @abstractmethod
    async def delete(self, playlist_id: str, track_id: str) -> DeleteOutcome:
        """Remove a track and close the gap it leaves.

        If the track was playing, the playlist is stopped in the same
        transaction.

        Raises:
            EntityNotFoundError: If the track is not in the playlist.
        """
        ...

    @abstractmethod
    async def move(self, playlist_id: str, track_id: str, new_position: int) -> MoveOutcome:
        """Move a track, shifting its neighbours.

        Raises:
            EntityNotFoundError: If the track is not in the playlist.
            ConflictError: If the playlist has no tracks.
        """
        ...

    @abstractmethod
    async def cast_vote(
        self,
        playlist_id: str,
        track_id: str,
        user_id: str,
        *,
        allow_repeat: bool,
        voted_at: datetime,
    ) -> VoteOutcome:
        """Count a vote and, for queued tracks, re-rank the queued segment.

        When ``allow_repeat`` is False a second vote by the same user is not
        counted and leaves every row untouched.

        Raises:
            EntityNotFoundError: If the track is not in the playlist.
        """
        ...


class PlaybackRepository(ABC):
    """Playback state machine persistence."""

    @abstractmethod
    async def advance(
        self,
        playlist_id: str,
        *,
        now: datetime,
        expected_track_id: str | None = None,
    ) -> AdvanceOutcome:
        """Run the NextTrack transition in one transaction.

        Args:
            playlist_id: The playlist to advance.
            now: Start time recorded for the newly playing track.
            expected_track_id: When given, the transition only runs if this
                track is still the current one; otherwise the current state is
                returned with ``changed=False``.

        Raises:
            EntityNotFoundError: If the playlist does not exist.
        """
        ...

    @abstractmethod
    async def get_state(self, playlist_id: str) -> PlayerState:
        """Raises EntityNotFoundError if the playlist does not exist."""
        ...

    @abstractmethod
    async def list_due(self, now: datetime) -> list[DueAdvancement]:
        """Playlists whose playing track has a known duration that has elapsed by ``now``."""
        ...
