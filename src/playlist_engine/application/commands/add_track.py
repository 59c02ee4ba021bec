"""
Add Track Command

Command and handler for appending a track to a playlist
(``POST /playlists/{id}/tracks``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.shared.types import DurationMs, EntityId

if TYPE_CHECKING:
    from ...domain.playlist.entities import Track
    from ...domain.playlist.services import TrackDraftPolicy
    from ..services.access_service import PlaylistAccessService
    from ..services.ordering_service import OrderingApplicationService


class AddTrackCommand(BaseModel):
    """Request to add a track. Text fields are trimmed and checked by the handler."""

    model_config = ConfigDict(frozen=True)

    playlist_id: EntityId
    user_id: EntityId
    title: str
    artist: str = ""
    provider: str | None = None
    provider_track_id: str | None = None
    thumbnail_url: str | None = None
    duration_ms: DurationMs = 0


class AddTrackHandler:
    def __init__(
        self,
        *,
        access_service: PlaylistAccessService,
        ordering_service: OrderingApplicationService,
        draft_policy: TrackDraftPolicy,
    ) -> None:
        self._access = access_service
        self._ordering = ordering_service
        self._policy = draft_policy

    async def handle(self, command: AddTrackCommand) -> Track:
        """Validate, authorize and insert.

        Returns:
            The created track with its assigned position (HTTP 201).
        """
        draft = self._policy.normalize(
            title=command.title,
            artist=command.artist,
            provider=command.provider,
            provider_track_id=command.provider_track_id,
            thumbnail_url=command.thumbnail_url,
            duration_ms=command.duration_ms,
        )
        await self._access.require_edit(command.playlist_id, command.user_id)
        return await self._ordering.add_track(command.playlist_id, draft)
