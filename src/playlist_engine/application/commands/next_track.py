"""
Next Track Command

``POST /playlists/{id}/next``. The requester must be allowed to edit the
playlist; the transition itself is shared with the advancement scheduler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.value_objects import PlayerState
    from ..services.access_service import PlaylistAccessService
    from ..services.playback_service import PlaybackApplicationService


class NextTrackCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    user_id: EntityId


class NextTrackHandler:
    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        playback_service: PlaybackApplicationService,
    ) -> None:
        self._access = access_service
        self._playback = playback_service

    async def handle(self, command: NextTrackCommand) -> PlayerState:
        await self._access.require_edit(command.playlist_id, command.user_id)
        return await self._playback.next_track(command.playlist_id)
