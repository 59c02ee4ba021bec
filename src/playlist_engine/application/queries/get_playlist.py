"""Query for a playlist together with its tracks in position order."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from playlist_engine.domain.playlist.entities import Playlist, Track
from playlist_engine.domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.repository import TrackRepository
    from ..services.access_service import PlaylistAccessService


class GetPlaylistQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    user_id: EntityId


class PlaylistView(BaseModel):

    playlist: Playlist
    tracks: list[Track] = Field(default_factory=list)

    @property
    def current_track(self) -> Track | None:
        return next((t for t in self.tracks if t.is_playing), None)

    @property
    def queued(self) -> list[Track]:
        return [t for t in self.tracks if t.is_queued]

    def to_response(self) -> dict[str, Any]:
        body = self.playlist.to_response()
        body["tracks"] = [t.to_response() for t in self.tracks]
        return body


class GetPlaylistHandler:

    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        track_repository: TrackRepository,
    ) -> None:
        self._access = access_service
        self._track_repo = track_repository

    async def handle(self, query: GetPlaylistQuery) -> PlaylistView:
        playlist = await self._access.require_view(query.playlist_id, query.user_id)
        tracks = await self._track_repo.list_for_playlist(query.playlist_id)
        return PlaylistView(playlist=playlist, tracks=tracks)
