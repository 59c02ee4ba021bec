"""Change events published after a playlist mutation commits.

Each event renders the ``{"type": ..., "payload": {...}}`` envelope consumed by
the realtime fan-out service.
"""

from __future__ import annotations

from typing import Any, ClassVar

from playlist_engine.domain.playlist.entities import Track
from playlist_engine.domain.playlist.value_objects import PlayerState
from playlist_engine.domain.shared.events import DomainEvent
from playlist_engine.domain.shared.types import EntityId, NonNegativeInt, QueuePositionInt


class PlaylistEvent(DomainEvent):
    """Base class for events scoped to a single playlist."""

    event_type: ClassVar[str] = "playlist.event"

    playlist_id: EntityId

    def payload(self) -> dict[str, Any]:
        return {"playlistId": self.playlist_id}

    def to_envelope(self) -> dict[str, Any]:
        return {"type": self.event_type, "payload": self.payload()}


class TrackAdded(PlaylistEvent):
    event_type: ClassVar[str] = "track.added"

    track: Track

    def payload(self) -> dict[str, Any]:
        return {"playlistId": self.playlist_id, "track": self.track.to_response()}


class TrackMoved(PlaylistEvent):
    event_type: ClassVar[str] = "track.moved"

    track_id: EntityId
    from_position: QueuePositionInt
    to_position: QueuePositionInt

    def payload(self) -> dict[str, Any]:
        return {
            "playlistId": self.playlist_id,
            "trackId": self.track_id,
            "from": self.from_position,
            "to": self.to_position,
        }


class TrackDeleted(PlaylistEvent):
    event_type: ClassVar[str] = "track.deleted"

    track_id: EntityId
    position: QueuePositionInt

    def payload(self) -> dict[str, Any]:
        return {
            "playlistId": self.playlist_id,
            "trackId": self.track_id,
            "position": self.position,
        }


class TrackVoteUpdated(PlaylistEvent):
    event_type: ClassVar[str] = "track.updated"

    track_id: EntityId
    vote_count: NonNegativeInt

    def payload(self) -> dict[str, Any]:
        return {
            "playlistId": self.playlist_id,
            "trackId": self.track_id,
            "voteCount": self.vote_count,
        }


class PlaylistReordered(PlaylistEvent):
    event_type: ClassVar[str] = "playlist.reordered"


class PlayerStateChanged(PlaylistEvent):
    event_type: ClassVar[str] = "player.state_changed"

    state: PlayerState

    @classmethod
    def from_state(cls, state: PlayerState) -> PlayerStateChanged:
        return cls(playlist_id=state.playlist_id, state=state)

    def payload(self) -> dict[str, Any]:
        return self.state.to_response()
