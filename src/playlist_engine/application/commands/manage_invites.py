"""
Invite Commands

Owner-only management of the invited users that unlock private playlists
and ``invited`` edit mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.shared.exceptions import ValidationError
from ...domain.shared.messages import ErrorMessages
from ...domain.shared.types import EntityId

if TYPE_CHECKING:
    from ...domain.playlist.repository import PlaylistRepository
    from ..services.access_service import PlaylistAccessService


class InviteMemberCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    user_id: EntityId
    invitee_id: EntityId


class RevokeInviteCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    user_id: EntityId
    invitee_id: EntityId


class InviteResult(BaseModel):
    playlist_id: EntityId
    invitee_id: EntityId
    changed: bool


class ManageInvitesHandler:
    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        playlist_repository: PlaylistRepository,
    ) -> None:
        self._access = access_service
        self._playlist_repo = playlist_repository

    async def invite(self, command: InviteMemberCommand) -> InviteResult:
        """Invite a user; inviting twice is a successful no-op."""
        playlist = await self._access.require_owner(command.playlist_id, command.user_id)
        if playlist.is_owned_by(command.invitee_id):
            raise ValidationError(ErrorMessages.OWNER_CANNOT_BE_INVITED, field="userId")

        created = await self._playlist_repo.add_member(command.playlist_id, command.invitee_id)
        return InviteResult(
            playlist_id=command.playlist_id, invitee_id=command.invitee_id, changed=created
        )

    async def revoke(self, command: RevokeInviteCommand) -> InviteResult:
        await self._access.require_owner(command.playlist_id, command.user_id)
        removed = await self._playlist_repo.remove_member(command.playlist_id, command.invitee_id)
        return InviteResult(
            playlist_id=command.playlist_id, invitee_id=command.invitee_id, changed=removed
        )
