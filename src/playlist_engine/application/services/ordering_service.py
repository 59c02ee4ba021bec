"""Ordering Application Service - insert, move and delete with post-commit events."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from ...domain.playlist.events import (
    PlayerStateChanged,
    TrackAdded,
    TrackDeleted,
    TrackMoved,
)
from ...domain.playlist.value_objects import PlayerState
from ...domain.shared.datetime_utils import utcnow
from ...domain.shared.exceptions import ValidationError
from ...domain.shared.messages import ErrorMessages

if TYPE_CHECKING:
    from ...domain.playlist.entities import Track, TrackDraft
    from ...domain.playlist.repository import TrackRepository
    from ...domain.playlist.value_objects import DeleteOutcome, MoveOutcome
    from ..interfaces.event_publisher import EventPublisher


class OrderingApplicationService:
    """Runs each ordering primitive as one transaction, then notifies subscribers."""

    def __init__(
        self,
        *,
        track_repository: TrackRepository,
        event_publisher: EventPublisher,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._track_repo = track_repository
        self._publisher = event_publisher
        self._clock = clock

    async def add_track(self, playlist_id: str, draft: TrackDraft) -> Track:
        track = await self._track_repo.insert(playlist_id, draft, created_at=self._clock())
        self._publisher.publish(TrackAdded(playlist_id=playlist_id, track=track))
        return track

    async def move_track(self, playlist_id: str, track_id: str, new_position: int) -> MoveOutcome:
        if new_position < 0:
            raise ValidationError(ErrorMessages.NEGATIVE_POSITION, field="newPosition")

        outcome = await self._track_repo.move(playlist_id, track_id, new_position)
        if not outcome.is_noop:
            self._publisher.publish(
                TrackMoved(
                    playlist_id=playlist_id,
                    track_id=track_id,
                    from_position=outcome.from_position,
                    to_position=outcome.to_position,
                )
            )
        return outcome

    async def delete_track(self, playlist_id: str, track_id: str) -> DeleteOutcome:
        outcome = await self._track_repo.delete(playlist_id, track_id)
        self._publisher.publish(
            TrackDeleted(playlist_id=playlist_id, track_id=track_id, position=outcome.position)
        )
        if outcome.stopped_playback:
            self._publisher.publish(
                PlayerStateChanged.from_state(PlayerState.stopped(playlist_id))
            )
        return outcome
