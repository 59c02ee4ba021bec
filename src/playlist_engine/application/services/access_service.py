"""Loads a playlist and applies the visibility and edit-mode rules to a requester."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...domain.playlist.services import PlaylistAccessPolicy
from ...domain.shared.exceptions import EntityNotFoundError

if TYPE_CHECKING:
    from ...domain.playlist.entities import Playlist
    from ...domain.playlist.repository import PlaylistRepository


class PlaylistAccessService:
    def __init__(self, *, playlist_repository: PlaylistRepository) -> None:
        self._playlist_repo = playlist_repository

    async def _load(self, playlist_id: str) -> Playlist:
        playlist = await self._playlist_repo.get(playlist_id)
        if playlist is None:
            raise EntityNotFoundError("Playlist", playlist_id)
        return playlist

    async def _is_member(self, playlist: Playlist, user_id: str) -> bool:
        # Owners never need an invitation lookup.
        if playlist.is_owned_by(user_id):
            return False
        return await self._playlist_repo.is_member(playlist.id, user_id)

    async def require_view(self, playlist_id: str, user_id: str) -> Playlist:
        playlist = await self._load(playlist_id)
        is_member = await self._is_member(playlist, user_id)
        PlaylistAccessPolicy.ensure_can_view(playlist, user_id, is_member=is_member)
        return playlist

    async def require_edit(self, playlist_id: str, user_id: str) -> Playlist:
        playlist = await self._load(playlist_id)
        is_member = await self._is_member(playlist, user_id)
        PlaylistAccessPolicy.ensure_can_edit(playlist, user_id, is_member=is_member)
        return playlist

    async def require_owner(self, playlist_id: str, user_id: str) -> Playlist:
        playlist = await self._load(playlist_id)
        PlaylistAccessPolicy.ensure_owner(playlist, user_id)
        return playlist
