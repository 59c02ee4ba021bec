"""Fire-and-forget publishing through a per-publisher delivery queue."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from abc import abstractmethod
from typing import TYPE_CHECKING

from playlist_engine.application.interfaces.event_publisher import EventPublisher
from playlist_engine.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from playlist_engine.domain.playlist.events import PlaylistEvent

logger = logging.getLogger(__name__)

DEFAULT_MAX_PENDING: int = 1000


class QueuedEventPublisher(EventPublisher):
    """Queues events and delivers them one at a time from a background worker.

    A single worker keeps delivery in publish order. Delivery errors are
    logged and the worker moves on to the next event.
    """

    def __init__(self, *, max_pending: int = DEFAULT_MAX_PENDING) -> None:
        self._queue: asyncio.Queue[PlaylistEvent] = asyncio.Queue(maxsize=max_pending)
        self._worker: asyncio.Task[None] | None = None

    @abstractmethod
    async def _deliver(self, event: PlaylistEvent) -> None: ...

    def publish(self, event: PlaylistEvent) -> None:
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._run())

        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning(
                LogTemplates.EVENT_PUBLISH_FAILED, event.event_type, event.playlist_id, "queue full"
            )

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._deliver(event)
            except Exception as e:
                logger.warning(
                    LogTemplates.EVENT_PUBLISH_FAILED, event.event_type, event.playlist_id, e
                )
            else:
                logger.debug(LogTemplates.EVENT_PUBLISHED, event.event_type, event.playlist_id)
            finally:
                self._queue.task_done()

    @property
    def pending_count(self) -> int:
        return self._queue.qsize()

    async def drain(self) -> None:
        if self._worker is None:
            return
        await self._queue.join()

    async def close(self) -> None:
        await self.drain()
        if self._worker is not None:
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
            self._worker = None
