"""Query for the users invited to a playlist (owner only)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from playlist_engine.domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.repository import PlaylistRepository
    from ..services.access_service import PlaylistAccessService


class ListInvitesQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    user_id: EntityId


class InviteList(BaseModel):
    playlist_id: EntityId
    user_ids: list[str] = Field(default_factory=list)


class ListInvitesHandler:

    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        playlist_repository: PlaylistRepository,
    ) -> None:
        self._access = access_service
        self._playlist_repo = playlist_repository

    async def handle(self, query: ListInvitesQuery) -> InviteList:
        await self._access.require_owner(query.playlist_id, query.user_id)
        members = await self._playlist_repo.list_members(query.playlist_id)
        return InviteList(playlist_id=query.playlist_id, user_ids=members)
