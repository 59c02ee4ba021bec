"""SQLite repository implementations."""

from playlist_engine.infrastructure.persistence.repositories.playback_repository import (
    SQLitePlaybackRepository,
)
from playlist_engine.infrastructure.persistence.repositories.playlist_repository import (
    SQLitePlaylistRepository,
)
from playlist_engine.infrastructure.persistence.repositories.track_repository import (
    SQLiteTrackRepository,
)

__all__ = [
    "SQLitePlaybackRepository",
    "SQLitePlaylistRepository",
    "SQLiteTrackRepository",
]
