"""
Application Commands (Write Side)

Command objects and their handlers for write operations.
Commands represent intent to change the system state.
"""

from playlist_engine.application.commands.add_track import AddTrackCommand, AddTrackHandler
from playlist_engine.application.commands.create_playlist import (
    CreatePlaylistCommand,
    CreatePlaylistHandler,
)
from playlist_engine.application.commands.delete_track import (
    DeleteTrackCommand,
    DeleteTrackHandler,
)
from playlist_engine.application.commands.manage_invites import (
    InviteMemberCommand,
    InviteResult,
    ManageInvitesHandler,
    RevokeInviteCommand,
)
from playlist_engine.application.commands.move_track import MoveTrackCommand, MoveTrackHandler
from playlist_engine.application.commands.next_track import NextTrackCommand, NextTrackHandler
from playlist_engine.application.commands.update_playlist import (
    UpdatePlaylistCommand,
    UpdatePlaylistHandler,
)
from playlist_engine.application.commands.vote_track import VoteTrackCommand, VoteTrackHandler

__all__ = [
    # Tracks
    "AddTrackCommand",
    "AddTrackHandler",
    "MoveTrackCommand",
    "MoveTrackHandler",
    "DeleteTrackCommand",
    "DeleteTrackHandler",
    # Votes
    "VoteTrackCommand",
    "VoteTrackHandler",
    # Playback
    "NextTrackCommand",
    "NextTrackHandler",
    # Playlists
    "CreatePlaylistCommand",
    "CreatePlaylistHandler",
    "UpdatePlaylistCommand",
    "UpdatePlaylistHandler",
    "InviteMemberCommand",
    "RevokeInviteCommand",
    "InviteResult",
    "ManageInvitesHandler",
]
