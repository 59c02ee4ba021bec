"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for repositories, publishers, services, handlers
and the advancement scheduler. Components are created on-demand and cached.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from ..domain.shared.datetime_utils import utcnow
from ..domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.commands.add_track import AddTrackHandler
    from ..application.commands.create_playlist import CreatePlaylistHandler
    from ..application.commands.delete_track import DeleteTrackHandler
    from ..application.commands.manage_invites import ManageInvitesHandler
    from ..application.commands.move_track import MoveTrackHandler
    from ..application.commands.next_track import NextTrackHandler
    from ..application.commands.update_playlist import UpdatePlaylistHandler
    from ..application.commands.vote_track import VoteTrackHandler
    from ..application.interfaces.event_publisher import EventPublisher
    from ..application.queries.get_player_state import GetPlayerStateHandler
    from ..application.queries.get_playlist import GetPlaylistHandler
    from ..application.queries.list_invites import ListInvitesHandler
    from ..application.queries.list_playlists import ListPlaylistsHandler
    from ..application.services.access_service import PlaylistAccessService
    from ..application.services.advancement_scheduler import AdvancementScheduler
    from ..application.services.ordering_service import OrderingApplicationService
    from ..application.services.playback_service import PlaybackApplicationService
    from ..application.services.vote_service import VoteApplicationService
    from ..domain.playlist.repository import (
        PlaybackRepository,
        PlaylistRepository,
        TrackRepository,
    )
    from ..domain.playlist.services import PlaylistDetailsPolicy, TrackDraftPolicy
    from ..domain.shared.events import EventBus
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings
    clock: Callable[[], datetime] = utcnow

    # Persistence layer
    _database: Database | None = None
    _playlist_repository: PlaylistRepository | None = None
    _track_repository: TrackRepository | None = None
    _playback_repository: PlaybackRepository | None = None

    # Events
    _event_bus: EventBus | None = None
    _event_publisher: EventPublisher | None = None

    # Application services
    _access_service: PlaylistAccessService | None = None
    _ordering_service: OrderingApplicationService | None = None
    _vote_service: VoteApplicationService | None = None
    _playback_service: PlaybackApplicationService | None = None

    # Command and query handlers
    _handlers: dict[str, object] = field(default_factory=dict)

    # Background jobs
    _advancement_scheduler: AdvancementScheduler | None = None

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def playlist_repository(self) -> PlaylistRepository:
        if self._playlist_repository is None:
            from ..infrastructure.persistence.repositories.playlist_repository import (
                SQLitePlaylistRepository,
            )

            self._playlist_repository = SQLitePlaylistRepository(self.database)
        return self._playlist_repository

    @property
    def track_repository(self) -> TrackRepository:
        if self._track_repository is None:
            from ..infrastructure.persistence.repositories.track_repository import (
                SQLiteTrackRepository,
            )

            self._track_repository = SQLiteTrackRepository(self.database)
        return self._track_repository

    @property
    def playback_repository(self) -> PlaybackRepository:
        if self._playback_repository is None:
            from ..infrastructure.persistence.repositories.playback_repository import (
                SQLitePlaybackRepository,
            )

            self._playback_repository = SQLitePlaybackRepository(self.database)
        return self._playback_repository

    # === Events ===

    @property
    def event_bus(self) -> EventBus:
        """Get the in-process event bus that realtime subscribers attach to."""
        if self._event_bus is None:
            from ..domain.shared.events import get_event_bus

            self._event_bus = get_event_bus()
        return self._event_bus

    @property
    def event_publisher(self) -> EventPublisher:
        """Bus publisher, plus the HTTP publisher when REALTIME__EVENTS_URL is set."""
        if self._event_publisher is None:
            from ..infrastructure.realtime.bus_publisher import BusEventPublisher

            realtime = self.settings.realtime
            bus_publisher = BusEventPublisher(
                self.event_bus, max_pending=realtime.max_pending_events
            )
            if realtime.events_url:
                from ..infrastructure.realtime.composite_publisher import (
                    CompositeEventPublisher,
                )
                from ..infrastructure.realtime.http_publisher import HttpEventPublisher

                self._event_publisher = CompositeEventPublisher(
                    [bus_publisher, HttpEventPublisher(realtime)]
                )
            else:
                self._event_publisher = bus_publisher
        return self._event_publisher

    # === Domain policies ===

    @property
    def track_draft_policy(self) -> TrackDraftPolicy:
        from ..domain.playlist.services import TrackDraftPolicy

        limits = self.settings.limits
        return TrackDraftPolicy(
            max_title_length=limits.max_title_length,
            max_artist_length=limits.max_artist_length,
            allowed_providers=limits.allowed_providers,
        )

    @property
    def playlist_details_policy(self) -> PlaylistDetailsPolicy:
        from ..domain.playlist.services import PlaylistDetailsPolicy

        limits = self.settings.limits
        return PlaylistDetailsPolicy(
            max_name_length=limits.max_playlist_name_length,
            max_description_length=limits.max_description_length,
        )

    # === Application Services ===

    @property
    def access_service(self) -> PlaylistAccessService:
        if self._access_service is None:
            from ..application.services.access_service import PlaylistAccessService

            self._access_service = PlaylistAccessService(
                playlist_repository=self.playlist_repository
            )
        return self._access_service

    @property
    def ordering_service(self) -> OrderingApplicationService:
        if self._ordering_service is None:
            from ..application.services.ordering_service import OrderingApplicationService

            self._ordering_service = OrderingApplicationService(
                track_repository=self.track_repository,
                event_publisher=self.event_publisher,
                clock=self.clock,
            )
        return self._ordering_service

    @property
    def vote_service(self) -> VoteApplicationService:
        if self._vote_service is None:
            from ..application.services.vote_service import VoteApplicationService

            self._vote_service = VoteApplicationService(
                track_repository=self.track_repository,
                event_publisher=self.event_publisher,
                settings=self.settings.voting,
                clock=self.clock,
            )
        return self._vote_service

    @property
    def playback_service(self) -> PlaybackApplicationService:
        if self._playback_service is None:
            from ..application.services.playback_service import PlaybackApplicationService

            self._playback_service = PlaybackApplicationService(
                playback_repository=self.playback_repository,
                event_publisher=self.event_publisher,
                clock=self.clock,
            )
        return self._playback_service

    # === Command Handlers ===

    @property
    def create_playlist_handler(self) -> CreatePlaylistHandler:
        if "create_playlist" not in self._handlers:
            from ..application.commands.create_playlist import CreatePlaylistHandler

            self._handlers["create_playlist"] = CreatePlaylistHandler(
                playlist_repository=self.playlist_repository,
                details_policy=self.playlist_details_policy,
                clock=self.clock,
            )
        return self._handlers["create_playlist"]  # type: ignore[return-value]

    @property
    def update_playlist_handler(self) -> UpdatePlaylistHandler:
        if "update_playlist" not in self._handlers:
            from ..application.commands.update_playlist import UpdatePlaylistHandler

            self._handlers["update_playlist"] = UpdatePlaylistHandler(
                access_service=self.access_service,
                playlist_repository=self.playlist_repository,
                details_policy=self.playlist_details_policy,
            )
        return self._handlers["update_playlist"]  # type: ignore[return-value]

    @property
    def manage_invites_handler(self) -> ManageInvitesHandler:
        if "manage_invites" not in self._handlers:
            from ..application.commands.manage_invites import ManageInvitesHandler

            self._handlers["manage_invites"] = ManageInvitesHandler(
                access_service=self.access_service,
                playlist_repository=self.playlist_repository,
            )
        return self._handlers["manage_invites"]  # type: ignore[return-value]

    @property
    def add_track_handler(self) -> AddTrackHandler:
        if "add_track" not in self._handlers:
            from ..application.commands.add_track import AddTrackHandler

            self._handlers["add_track"] = AddTrackHandler(
                access_service=self.access_service,
                ordering_service=self.ordering_service,
                draft_policy=self.track_draft_policy,
            )
        return self._handlers["add_track"]  # type: ignore[return-value]

    @property
    def move_track_handler(self) -> MoveTrackHandler:
        if "move_track" not in self._handlers:
            from ..application.commands.move_track import MoveTrackHandler

            self._handlers["move_track"] = MoveTrackHandler(
                access_service=self.access_service,
                ordering_service=self.ordering_service,
            )
        return self._handlers["move_track"]  # type: ignore[return-value]

    @property
    def delete_track_handler(self) -> DeleteTrackHandler:
        if "delete_track" not in self._handlers:
            from ..application.commands.delete_track import DeleteTrackHandler

            self._handlers["delete_track"] = DeleteTrackHandler(
                access_service=self.access_service,
                ordering_service=self.ordering_service,
            )
        return self._handlers["delete_track"]  # type: ignore[return-value]

    @property
    def vote_track_handler(self) -> VoteTrackHandler:
        if "vote_track" not in self._handlers:
            from ..application.commands.vote_track import VoteTrackHandler

            self._handlers["vote_track"] = VoteTrackHandler(
                access_service=self.access_service,
                vote_service=self.vote_service,
            )
        return self._handlers["vote_track"]  # type: ignore[return-value]

    @property
    def next_track_handler(self) -> NextTrackHandler:
        if "next_track" not in self._handlers:
            from ..application.commands.next_track import NextTrackHandler

            self._handlers["next_track"] = NextTrackHandler(
                access_service=self.access_service,
                playback_service=self.playback_service,
            )
        return self._handlers["next_track"]  # type: ignore[return-value]

    # === Query Handlers ===

    @property
    def get_playlist_handler(self) -> GetPlaylistHandler:
        if "get_playlist" not in self._handlers:
            from ..application.queries.get_playlist import GetPlaylistHandler

            self._handlers["get_playlist"] = GetPlaylistHandler(
                access_service=self.access_service,
                track_repository=self.track_repository,
            )
        return self._handlers["get_playlist"]  # type: ignore[return-value]

    @property
    def get_player_state_handler(self) -> GetPlayerStateHandler:
        if "get_player_state" not in self._handlers:
            from ..application.queries.get_player_state import GetPlayerStateHandler

            self._handlers["get_player_state"] = GetPlayerStateHandler(
                access_service=self.access_service,
                playback_service=self.playback_service,
            )
        return self._handlers["get_player_state"]  # type: ignore[return-value]

    @property
    def list_invites_handler(self) -> ListInvitesHandler:
        if "list_invites" not in self._handlers:
            from ..application.queries.list_invites import ListInvitesHandler

            self._handlers["list_invites"] = ListInvitesHandler(
                access_service=self.access_service,
                playlist_repository=self.playlist_repository,
            )
        return self._handlers["list_invites"]  # type: ignore[return-value]

    @property
    def list_playlists_handler(self) -> ListPlaylistsHandler:
        if "list_playlists" not in self._handlers:
            from ..application.queries.list_playlists import ListPlaylistsHandler

            self._handlers["list_playlists"] = ListPlaylistsHandler(
                playlist_repository=self.playlist_repository,
            )
        return self._handlers["list_playlists"]  # type: ignore[return-value]

    # === Background Jobs ===

    @property
    def advancement_scheduler(self) -> AdvancementScheduler:
        if self._advancement_scheduler is None:
            from ..application.services.advancement_scheduler import AdvancementScheduler

            self._advancement_scheduler = AdvancementScheduler(
                playback_service=self.playback_service,
                settings=self.settings.scheduler,
            )
        return self._advancement_scheduler

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize the schema and start the scheduler when enabled."""
        await self.database.initialize()

        if self.settings.scheduler.enabled:
            self.advancement_scheduler.start()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        try:
            if self._advancement_scheduler is not None:
                await self._advancement_scheduler.stop()
        except Exception as exc:
            logger.warning(LogTemplates.SHUTDOWN_STEP_FAILED, "advancement scheduler", exc)

        try:
            if self._event_publisher is not None:
                await self._event_publisher.close()
        except Exception as exc:
            logger.warning(LogTemplates.SHUTDOWN_STEP_FAILED, "event publisher", exc)

        if self._database is not None:
            await self._database.close()

        self._handlers.clear()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
