"""Immutable value objects for the playlist bounded context."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from playlist_engine.domain.shared.datetime_utils import UtcDateTime
from playlist_engine.domain.shared.types import (
    EntityId,
    NonNegativeInt,
    PositiveInt,
    QueuePositionInt,
    UtcDatetimeField,
)


class TrackStatus(str, Enum):
    """Lifecycle of a track with respect to playback."""

    QUEUED = "queued"
    PLAYING = "playing"
    PLAYED = "played"

    @property
    def is_queued(self) -> bool:
        return self == TrackStatus.QUEUED

    def can_transition_to(self, target: TrackStatus) -> bool:
        valid = {
            TrackStatus.QUEUED: {TrackStatus.PLAYING},
            TrackStatus.PLAYING: {TrackStatus.PLAYED},
            TrackStatus.PLAYED: set(),
        }
        return target in valid[self]


class EditMode(str, Enum):
    """Which non-owner users may mutate a playlist's tracks."""

    EVERYONE = "everyone"
    INVITED = "invited"


class PlaybackStatus(str, Enum):
    PLAYING = "playing"
    STOPPED = "stopped"


class PlayerState(BaseModel):
    """Playback state of one playlist: Stopped, or Playing(track, started_at)."""

    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    current_track_id: EntityId | None = None
    playing_started_at: UtcDatetimeField | None = None

    @property
    def status(self) -> PlaybackStatus:
        if self.current_track_id is None:
            return PlaybackStatus.STOPPED
        return PlaybackStatus.PLAYING

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING

    @classmethod
    def stopped(cls, playlist_id: str) -> PlayerState:
        return cls(playlist_id=playlist_id)

    def to_response(self) -> dict[str, Any]:
        started = self.playing_started_at
        return {
            "playlistId": self.playlist_id,
            "currentTrackId": self.current_track_id,
            "playingStartedAt": UtcDateTime(started).iso_z if started else None,
            "status": self.status.value,
        }


class AdvanceOutcome(BaseModel):
    """Result of a NextTrack transition; ``changed`` is False when it was skipped."""

    model_config = ConfigDict(frozen=True)

    state: PlayerState
    changed: bool = True


class MoveOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    track_id: EntityId
    from_position: QueuePositionInt
    to_position: QueuePositionInt

    @property
    def is_noop(self) -> bool:
        return self.from_position == self.to_position

    def to_response(self) -> dict[str, Any]:
        return {"trackId": self.track_id, "from": self.from_position, "to": self.to_position}


class DeleteOutcome(BaseModel):
    """What a delete removed; ``stopped_playback`` is set when the playing track went away."""

    model_config = ConfigDict(frozen=True)

    track_id: EntityId
    position: QueuePositionInt
    stopped_playback: bool = False


class VoteOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    track_id: EntityId
    vote_count: NonNegativeInt
    status: TrackStatus
    counted: bool = True
    reordered: bool = False

    def to_response(self) -> dict[str, Any]:
        return {"voteCount": self.vote_count}


class DueAdvancement(BaseModel):
    """A playlist whose playing track has run past its duration."""

    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    track_id: EntityId
    playing_started_at: UtcDatetimeField
    duration_ms: PositiveInt
