"""Query for the current player state of a playlist."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from playlist_engine.domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.value_objects import PlayerState
    from ..services.access_service import PlaylistAccessService
    from ..services.playback_service import PlaybackApplicationService


class GetPlayerStateQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    user_id: EntityId


class GetPlayerStateHandler:

    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        playback_service: PlaybackApplicationService,
    ) -> None:
        self._access = access_service
        self._playback = playback_service

    async def handle(self, query: GetPlayerStateQuery) -> PlayerState:
        await self._access.require_view(query.playlist_id, query.user_id)
        return await self._playback.get_state(query.playlist_id)
