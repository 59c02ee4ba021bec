"""Query for the playlists a user can see."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from playlist_engine.domain.playlist.entities import Playlist
from playlist_engine.domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.repository import PlaylistRepository

MAX_LISTED_PLAYLISTS = 200


class ListPlaylistsQuery(BaseModel):
    """List visible playlists, newest first.

    Anonymous callers (no ``user_id``) only see public playlists.
    """

    model_config = ConfigDict(frozen=True)

    user_id: EntityId | None = None
    limit: int = Field(default=MAX_LISTED_PLAYLISTS, ge=1, le=MAX_LISTED_PLAYLISTS)


class PlaylistList(BaseModel):
    playlists: list[Playlist] = Field(default_factory=list)

    def to_response(self) -> list[dict[str, Any]]:
        return [p.to_response() for p in self.playlists]


class ListPlaylistsHandler:

    def __init__(self, *, playlist_repository: PlaylistRepository) -> None:
        self._playlist_repo = playlist_repository

    async def handle(self, query: ListPlaylistsQuery) -> PlaylistList:
        playlists = await self._playlist_repo.list_visible(query.user_id, query.limit)
        return PlaylistList(playlists=playlists)
