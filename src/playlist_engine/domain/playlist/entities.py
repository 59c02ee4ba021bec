"""Core domain entities for the playlist bounded context."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from playlist_engine.domain.playlist.value_objects import (
    EditMode,
    PlayerState,
    TrackStatus,
)
from playlist_engine.domain.shared.datetime_utils import UtcDateTime, utcnow
from playlist_engine.domain.shared.types import (
    DurationMs,
    EntityId,
    NonEmptyStr,
    NonNegativeInt,
    QueuePositionInt,
    UtcDatetimeField,
)


def new_id() -> str:
    return str(uuid4())


class Playlist(BaseModel):
    """Aggregate root owning an ordered list of tracks and its playback state."""

    model_config = ConfigDict(frozen=True)

    id: EntityId = Field(default_factory=new_id)
    owner_id: EntityId
    name: NonEmptyStr
    description: str = ""
    is_public: bool = True
    edit_mode: EditMode = EditMode.EVERYONE
    current_track_id: EntityId | None = None
    playing_started_at: UtcDatetimeField | None = None
    created_at: UtcDatetimeField = Field(default_factory=utcnow)

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id

    @property
    def player_state(self) -> PlayerState:
        return PlayerState(
            playlist_id=self.id,
            current_track_id=self.current_track_id,
            playing_started_at=self.playing_started_at,
        )

    def to_response(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "name": self.name,
            "description": self.description,
            "isPublic": self.is_public,
            "editMode": self.edit_mode.value,
            "currentTrackId": self.current_track_id,
            "playingStartedAt": (
                UtcDateTime(self.playing_started_at).iso_z if self.playing_started_at else None
            ),
            "createdAt": UtcDateTime(self.created_at).iso_z,
        }


class TrackDraft(BaseModel):
    """Validated track metadata awaiting a position in a playlist."""

    model_config = ConfigDict(frozen=True)

    title: NonEmptyStr
    artist: str = ""
    provider: str | None = None
    provider_track_id: str | None = None
    thumbnail_url: str | None = None
    duration_ms: DurationMs = 0

    def to_track(
        self,
        *,
        playlist_id: str,
        position: int,
        created_at: datetime,
        track_id: str | None = None,
    ) -> Track:
        return Track(
            id=track_id or new_id(),
            playlist_id=playlist_id,
            title=self.title,
            artist=self.artist,
            provider=self.provider,
            provider_track_id=self.provider_track_id,
            thumbnail_url=self.thumbnail_url,
            duration_ms=self.duration_ms,
            position=position,
            created_at=created_at,
        )


class Track(BaseModel):
    """A track at a fixed position inside one playlist."""

    model_config = ConfigDict(frozen=True)

    id: EntityId
    playlist_id: EntityId
    title: NonEmptyStr
    artist: str = ""
    provider: str | None = None
    provider_track_id: str | None = None
    thumbnail_url: str | None = None
    duration_ms: DurationMs = 0
    position: QueuePositionInt
    vote_count: NonNegativeInt = 0
    status: TrackStatus = TrackStatus.QUEUED
    created_at: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def is_queued(self) -> bool:
        return self.status == TrackStatus.QUEUED

    @property
    def is_playing(self) -> bool:
        return self.status == TrackStatus.PLAYING

    def to_response(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "playlistId": self.playlist_id,
            "title": self.title,
            "artist": self.artist,
            "provider": self.provider,
            "providerTrackId": self.provider_track_id,
            "thumbnailUrl": self.thumbnail_url,
            "durationMs": self.duration_ms,
            "position": self.position,
            "voteCount": self.vote_count,
            "status": self.status.value,
            "createdAt": UtcDateTime(self.created_at).iso_z,
        }
