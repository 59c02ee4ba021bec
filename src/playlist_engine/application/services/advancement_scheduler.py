"""Periodic advancement of playlists whose playing track has run its course."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import NonNegativeInt

if TYPE_CHECKING:
    from ...config.settings import SchedulerSettings
    from .playback_service import PlaybackApplicationService

logger = logging.getLogger(__name__)


class AdvancementScheduler:
    """Background loop calling ``next_track`` for overdue playlists.

    Holds no state between ticks besides the loop task itself. A failure for
    one playlist is logged and the playlist is looked at again next tick.
    """

    def __init__(
        self,
        *,
        playback_service: PlaybackApplicationService,
        settings: SchedulerSettings,
    ) -> None:
        self._playback_service = playback_service
        self._settings = settings
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def interval_seconds(self) -> float:
        return self._settings.tick_interval_ms / 1000

    def start(self) -> None:
        if self._running:
            logger.warning(LogTemplates.SCHEDULER_ALREADY_RUNNING)
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(LogTemplates.SCHEDULER_STARTED, self.interval_seconds)

    async def stop(self) -> None:
        self._running = False

        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info(LogTemplates.SCHEDULER_STOPPED)

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.run_tick()
            except Exception:
                logger.exception(LogTemplates.SCHEDULER_TICK_FAILED)

            await asyncio.sleep(self.interval_seconds)

    async def run_tick(self) -> TickStats:
        stats = TickStats()

        try:
            due = await self._playback_service.due_advancements()
        except Exception as e:
            logger.error(LogTemplates.SCHEDULER_QUERY_FAILED, e)
            stats.query_failed = True
            return stats

        stats.due = len(due)
        if due:
            logger.debug(LogTemplates.SCHEDULER_DUE, len(due))

        for item in due:
            try:
                await self._playback_service.next_track(
                    item.playlist_id, expected_track_id=item.track_id
                )
            except Exception:
                logger.exception(LogTemplates.SCHEDULER_ADVANCE_FAILED, item.playlist_id)
                stats.failed += 1
            else:
                stats.advanced += 1

        return stats

    @property
    def is_running(self) -> bool:
        return self._running


class TickStats(BaseModel):
    due: NonNegativeInt = 0
    advanced: NonNegativeInt = 0
    failed: NonNegativeInt = 0
    query_failed: bool = False
