"""
Create Playlist Command

``POST /playlists``: the requester becomes the owner.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.playlist.entities import Playlist
from ...domain.playlist.value_objects import EditMode
from ...domain.shared.datetime_utils import utcnow
from ...domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.repository import PlaylistRepository
    from ...domain.playlist.services import PlaylistDetailsPolicy


class CreatePlaylistCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner_id: EntityId
    name: str
    description: str = ""
    is_public: bool = True
    edit_mode: EditMode = EditMode.EVERYONE


class CreatePlaylistHandler:
    def __init__(
        self,
        *,
        playlist_repository: PlaylistRepository,
        details_policy: PlaylistDetailsPolicy,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._playlist_repo = playlist_repository
        self._policy = details_policy
        self._clock = clock

    async def handle(self, command: CreatePlaylistCommand) -> Playlist:
        name, description = self._policy.normalize(
            name=command.name, description=command.description
        )
        playlist = Playlist(
            owner_id=command.owner_id,
            name=name,
            description=description,
            is_public=command.is_public,
            edit_mode=command.edit_mode,
            created_at=self._clock(),
        )
        return await self._playlist_repo.create(playlist)
