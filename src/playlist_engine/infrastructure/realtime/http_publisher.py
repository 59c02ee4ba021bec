"""Forwards event envelopes to the realtime fan-out service over HTTP."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from playlist_engine.domain.shared.constants import HTTPHeaders
from playlist_engine.domain.shared.messages import LogTemplates
from playlist_engine.infrastructure.realtime.queued_publisher import QueuedEventPublisher

if TYPE_CHECKING:
    from playlist_engine.config.settings import RealtimeSettings
    from playlist_engine.domain.playlist.events import PlaylistEvent

logger = logging.getLogger(__name__)


class HttpEventPublisher(QueuedEventPublisher):
    """POSTs ``{"type", "payload"}`` to the realtime service's ``/events`` endpoint."""

    def __init__(
        self,
        settings: RealtimeSettings,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(max_pending=settings.max_pending_events)
        if not settings.events_url:
            raise ValueError("RealtimeSettings.events_url is required for HTTP publishing")
        self._url = settings.events_url
        self._timeout = settings.timeout_s
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={HTTPHeaders.USER_AGENT: HTTPHeaders.USER_AGENT_VALUE},
            )
        return self._client

    async def _deliver(self, event: PlaylistEvent) -> None:
        response = await self._get_client().post(self._url, json=event.to_envelope())
        if response.is_error:
            logger.warning(LogTemplates.EVENT_HTTP_REJECTED, event.event_type, response.status_code)

    async def close(self) -> None:
        await super().close()
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
