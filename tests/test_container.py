"""Tests for the dependency injection container."""

import pytest

from playlist_engine.config.container import Container, create_container
from playlist_engine.config.settings import (
    DatabaseSettings,
    LimitsSettings,
    RealtimeSettings,
    SchedulerSettings,
    Settings,
)
from playlist_engine.domain.shared.events import reset_event_bus
from playlist_engine.infrastructure.realtime.bus_publisher import BusEventPublisher
from playlist_engine.infrastructure.realtime.composite_publisher import CompositeEventPublisher
from playlist_engine.infrastructure.realtime.http_publisher import HttpEventPublisher


def _settings(**overrides) -> Settings:
    data = {
        "environment": "test",
        "database": DatabaseSettings(url=":memory:"),
        "scheduler": SchedulerSettings(enabled=False),
    }
    data.update(overrides)
    return Settings(**data)


@pytest.fixture(autouse=True)
def _fresh_bus():
    reset_event_bus()
    yield
    reset_event_bus()


class TestContainerWiring:
    def test_create_container(self):
        """Should build a container around the given settings."""
        settings = _settings()

        container = create_container(settings)

        assert isinstance(container, Container)
        assert container.settings is settings

    def test_lazy_singletons(self):
        """Should build each component once and reuse it."""
        container = create_container(_settings())

        assert container.database is container.database
        assert container.track_repository is container.track_repository
        assert container.ordering_service is container.ordering_service
        assert container.add_track_handler is container.add_track_handler
        assert container.advancement_scheduler is container.advancement_scheduler

    def test_repositories_share_database(self):
        """Should hand the same database to every repository."""
        container = create_container(_settings())

        assert container.playlist_repository._db is container.database
        assert container.track_repository._db is container.database
        assert container.playback_repository._db is container.database

    def test_bus_publisher_by_default(self):
        """Should publish only onto the event bus without a realtime URL."""
        container = create_container(_settings())

        assert isinstance(container.event_publisher, BusEventPublisher)

    def test_http_publisher_when_configured(self):
        """Should add the HTTP publisher when an events URL is configured."""
        container = create_container(
            _settings(realtime=RealtimeSettings(events_url="http://realtime.local/events"))
        )

        publisher = container.event_publisher

        assert isinstance(publisher, CompositeEventPublisher)
        assert [type(p) for p in publisher.publishers] == [
            BusEventPublisher,
            HttpEventPublisher,
        ]

    def test_policies_follow_limits(self):
        """Should configure input policies from the limits section."""
        container = create_container(
            _settings(limits=LimitsSettings(max_title_length=42, allowed_providers=("youtube", "vimeo")))
        )

        policy = container.track_draft_policy

        assert policy.max_title_length == 42
        assert policy.allowed_providers == ("youtube", "vimeo")


class TestContainerLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_without_scheduler(self):
        """Should create the schema and leave the scheduler off when disabled."""
        container = create_container(_settings())

        await container.initialize()
        try:
            stats = await container.database.get_stats()
            assert stats["initialized"]
            assert container._advancement_scheduler is None
        finally:
            await container.shutdown()

    @pytest.mark.asyncio
    async def test_initialize_starts_scheduler(self):
        """Should start the scheduler when enabled and stop it on shutdown."""
        container = create_container(
            _settings(scheduler=SchedulerSettings(enabled=True, tick_interval_ms=50))
        )

        await container.initialize()
        scheduler = container.advancement_scheduler
        assert scheduler.is_running

        await container.shutdown()
        assert not scheduler.is_running

    @pytest.mark.asyncio
    async def test_shutdown_clears_handlers(self):
        """Should drop cached handlers on shutdown."""
        container = create_container(_settings())
        await container.initialize()
        first = container.move_track_handler

        await container.shutdown()

        assert container._handlers == {}
        assert container.move_track_handler is not first

    @pytest.mark.asyncio
    async def test_shutdown_without_initialize(self):
        """Should shut down cleanly when nothing was built."""
        container = create_container(_settings())

        await container.shutdown()
