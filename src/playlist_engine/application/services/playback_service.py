"""Playback Application Service - drives the Stopped/Playing state machine.

Both the ``/next`` command and the advancement scheduler go through
:meth:`PlaybackApplicationService.next_track`, so there is a single
transition path.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from ...domain.playlist.events import PlayerStateChanged
from ...domain.shared.datetime_utils import utcnow

if TYPE_CHECKING:
    from ...domain.playlist.repository import PlaybackRepository
    from ...domain.playlist.value_objects import DueAdvancement, PlayerState
    from ..interfaces.event_publisher import EventPublisher


class PlaybackApplicationService:
    def __init__(
        self,
        *,
        playback_repository: PlaybackRepository,
        event_publisher: EventPublisher,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._playback_repo = playback_repository
        self._publisher = event_publisher
        self._clock = clock

    async def next_track(
        self, playlist_id: str, *, expected_track_id: str | None = None
    ) -> PlayerState:
        """Finish the current track and start the lowest queued one.

        Args:
            playlist_id: The playlist to advance.
            expected_track_id: Only advance if this track is still current.
                The scheduler passes the track it found to be overdue so a
                manual skip that lands first is not followed by a second skip.

        Returns:
            The resulting player state.
        """
        outcome = await self._playback_repo.advance(
            playlist_id, now=self._clock(), expected_track_id=expected_track_id
        )
        if outcome.changed:
            self._publisher.publish(PlayerStateChanged.from_state(outcome.state))
        return outcome.state

    async def get_state(self, playlist_id: str) -> PlayerState:
        return await self._playback_repo.get_state(playlist_id)

    async def due_advancements(self) -> list[DueAdvancement]:
        return await self._playback_repo.list_due(self._clock())
