"""
Vote Track Command

``POST /playlists/{id}/tracks/{trackId}/vote``. Voting only needs view
access; edit mode does not apply.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.value_objects import VoteOutcome
    from ..services.access_service import PlaylistAccessService
    from ..services.vote_service import VoteApplicationService


class VoteTrackCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    track_id: EntityId
    user_id: EntityId


class VoteTrackHandler:
    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        vote_service: VoteApplicationService,
    ) -> None:
        self._access = access_service
        self._votes = vote_service

    async def handle(self, command: VoteTrackCommand) -> VoteOutcome:
        await self._access.require_view(command.playlist_id, command.user_id)
        return await self._votes.cast_vote(command.playlist_id, command.track_id, command.user_id)
