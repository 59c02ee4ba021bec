"""
Event Publisher Interface

Port interface for post-commit change notifications.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.playlist.events import PlaylistEvent


class EventPublisher(ABC):
    """Abstract interface for fanning out playlist change events.

    Implementations must:
    - return from ``publish`` without waiting on delivery
    - log and swallow delivery failures; a committed mutation is never undone
    """

    @abstractmethod
    def publish(self, event: PlaylistEvent) -> None:
        """Schedule delivery of an event.

        Args:
            event: The event describing an already committed change.
        """
        ...

    @abstractmethod
    async def drain(self) -> None:
        """Wait for every scheduled delivery to finish."""
        ...

    async def close(self) -> None:
        """Flush pending deliveries and release resources."""
        await self.drain()
