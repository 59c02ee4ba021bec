"""
Application Queries (Read Side)

Query objects and their handlers for read operations.
"""

from playlist_engine.application.queries.get_player_state import (
    GetPlayerStateHandler,
    GetPlayerStateQuery,
)
from playlist_engine.application.queries.get_playlist import (
    GetPlaylistHandler,
    GetPlaylistQuery,
    PlaylistView,
)
from playlist_engine.application.queries.list_invites import (
    InviteList,
    ListInvitesHandler,
    ListInvitesQuery,
)
from playlist_engine.application.queries.list_playlists import (
    ListPlaylistsHandler,
    ListPlaylistsQuery,
    PlaylistList,
)

__all__ = [
    "GetPlaylistQuery",
    "GetPlaylistHandler",
    "PlaylistView",
    "GetPlayerStateQuery",
    "GetPlayerStateHandler",
    "ListInvitesQuery",
    "ListInvitesHandler",
    "InviteList",
    "ListPlaylistsQuery",
    "ListPlaylistsHandler",
    "PlaylistList",
]
