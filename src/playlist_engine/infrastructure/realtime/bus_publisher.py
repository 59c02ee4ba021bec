"""Publishes playlist events onto the in-process EventBus."""

from __future__ import annotations

from typing import TYPE_CHECKING

from playlist_engine.infrastructure.realtime.queued_publisher import (
    DEFAULT_MAX_PENDING,
    QueuedEventPublisher,
)

if TYPE_CHECKING:
    from playlist_engine.domain.playlist.events import PlaylistEvent
    from playlist_engine.domain.shared.events import EventBus


class BusEventPublisher(QueuedEventPublisher):
    def __init__(self, event_bus: EventBus, *, max_pending: int = DEFAULT_MAX_PENDING) -> None:
        super().__init__(max_pending=max_pending)
        self._bus = event_bus

    async def _deliver(self, event: PlaylistEvent) -> None:
        await self._bus.publish(event)
