"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (SQLite store and repositories)
- Realtime (event bus and HTTP fan-out publishers)
"""

from playlist_engine.infrastructure.persistence.database import Database
from playlist_engine.infrastructure.realtime.bus_publisher import BusEventPublisher
from playlist_engine.infrastructure.realtime.http_publisher import HttpEventPublisher

__all__ = [
    "Database",
    "BusEventPublisher",
    "HttpEventPublisher",
]
