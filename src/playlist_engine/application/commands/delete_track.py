"""
Delete Track Command

``DELETE /playlists/{id}/tracks/{trackId}``; answers 204 on success.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.value_objects import DeleteOutcome
    from ..services.access_service import PlaylistAccessService
    from ..services.ordering_service import OrderingApplicationService


class DeleteTrackCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    track_id: EntityId
    user_id: EntityId


class DeleteTrackHandler:
    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        ordering_service: OrderingApplicationService,
    ) -> None:
        self._access = access_service
        self._ordering = ordering_service

    async def handle(self, command: DeleteTrackCommand) -> DeleteOutcome:
        await self._access.require_edit(command.playlist_id, command.user_id)
        return await self._ordering.delete_track(command.playlist_id, command.track_id)
