"""
Update Playlist Command

Owner-only partial update of name, description, visibility and edit mode.
Fields left as None keep their current value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.playlist.value_objects import EditMode
from ...domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.entities import Playlist
    from ...domain.playlist.repository import PlaylistRepository
    from ...domain.playlist.services import PlaylistDetailsPolicy
    from ..services.access_service import PlaylistAccessService


class UpdatePlaylistCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    user_id: EntityId
    name: str | None = None
    description: str | None = None
    is_public: bool | None = None
    edit_mode: EditMode | None = None


class UpdatePlaylistHandler:
    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        playlist_repository: PlaylistRepository,
        details_policy: PlaylistDetailsPolicy,
    ) -> None:
        self._access = access_service
        self._playlist_repo = playlist_repository
        self._policy = details_policy

    async def handle(self, command: UpdatePlaylistCommand) -> Playlist:
        playlist = await self._access.require_owner(command.playlist_id, command.user_id)

        name, description = self._policy.normalize(
            name=command.name if command.name is not None else playlist.name,
            description=(
                command.description if command.description is not None else playlist.description
            ),
        )
        updated = playlist.model_copy(
            update={
                "name": name,
                "description": description,
                "is_public": (
                    command.is_public if command.is_public is not None else playlist.is_public
                ),
                "edit_mode": command.edit_mode or playlist.edit_mode,
            }
        )
        return await self._playlist_repo.update_details(updated)
