"""Vote Application Service - counts votes and re-ranks the queued segment."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from ...domain.playlist.events import PlaylistReordered, TrackVoteUpdated
from ...domain.shared.datetime_utils import utcnow

if TYPE_CHECKING:
    from ...config.settings import VotingSettings
    from ...domain.playlist.repository import TrackRepository
    from ...domain.playlist.value_objects import VoteOutcome
    from ..interfaces.event_publisher import EventPublisher


class VoteApplicationService:
    def __init__(
        self,
        *,
        track_repository: TrackRepository,
        event_publisher: EventPublisher,
        settings: VotingSettings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._track_repo = track_repository
        self._publisher = event_publisher
        self._settings = settings
        self._clock = clock

    async def cast_vote(self, playlist_id: str, track_id: str, user_id: str) -> VoteOutcome:
        outcome = await self._track_repo.cast_vote(
            playlist_id,
            track_id,
            user_id,
            allow_repeat=self._settings.allow_repeat_votes,
            voted_at=self._clock(),
        )
        if not outcome.counted:
            return outcome

        self._publisher.publish(
            TrackVoteUpdated(
                playlist_id=playlist_id, track_id=track_id, vote_count=outcome.vote_count
            )
        )
        if outcome.reordered:
            self._publisher.publish(PlaylistReordered(playlist_id=playlist_id))
        return outcome
