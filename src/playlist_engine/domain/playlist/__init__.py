"""
Playlist Bounded Context

Playlists, their ordered tracks, vote ranking and the playback state machine.
"""

from playlist_engine.domain.playlist.entities import Playlist, Track, TrackDraft
from playlist_engine.domain.playlist.value_objects import (
    EditMode,
    PlaybackStatus,
    PlayerState,
    TrackStatus,
)

__all__ = [
    "Playlist",
    "Track",
    "TrackDraft",
    "EditMode",
    "PlaybackStatus",
    "PlayerState",
    "TrackStatus",
]
