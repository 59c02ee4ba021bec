"""Fans one publish call out to several publishers."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING

from playlist_engine.application.interfaces.event_publisher import EventPublisher

if TYPE_CHECKING:
    from playlist_engine.domain.playlist.events import PlaylistEvent


class CompositeEventPublisher(EventPublisher):
    def __init__(self, publishers: Sequence[EventPublisher]) -> None:
        self._publishers = tuple(publishers)

    @property
    def publishers(self) -> tuple[EventPublisher, ...]:
        return self._publishers

    def publish(self, event: PlaylistEvent) -> None:
        for publisher in self._publishers:
            publisher.publish(event)

    async def drain(self) -> None:
        await asyncio.gather(*(p.drain() for p in self._publishers))

    async def close(self) -> None:
        await asyncio.gather(*(p.close() for p in self._publishers))
