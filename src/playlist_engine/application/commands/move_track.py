"""
Move Track Command

Command and handler for manual reordering
(``PATCH /playlists/{id}/tracks/{trackId}``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.shared.exceptions import ValidationError
from ...domain.shared.messages import ErrorMessages
from ...domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.value_objects import MoveOutcome
    from ..services.access_service import PlaylistAccessService
    from ..services.ordering_service import OrderingApplicationService


class MoveTrackCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    track_id: EntityId
    user_id: EntityId
    new_position: int


class MoveTrackHandler:
    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        ordering_service: OrderingApplicationService,
    ) -> None:
        self._access = access_service
        self._ordering = ordering_service

    async def handle(self, command: MoveTrackCommand) -> MoveOutcome:
        # Rejected before any lookup or transaction.
        if command.new_position < 0:
            raise ValidationError(ErrorMessages.NEGATIVE_POSITION, field="newPosition")

        await self._access.require_edit(command.playlist_id, command.user_id)
        return await self._ordering.move_track(
            command.playlist_id, command.track_id, command.new_position
        )
