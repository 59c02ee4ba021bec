from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

# ============================================================================
# Clock
# ============================================================================


class FakeClock:
    """Deterministic clock: each call advances by ``step``."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(milliseconds=1)):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


# ============================================================================
# Event capture
# ============================================================================


class RecordingPublisher:
    """EventPublisher test double that keeps every published event in order."""

    def __init__(self):
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)

    async def drain(self) -> None:
        return None

    async def close(self) -> None:
        return None

    @property
    def types(self) -> list[str]:
        return [e.event_type for e in self.events]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def publisher():
    return RecordingPublisher()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from playlist_engine.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def file_database(tmp_path):
    """File-backed database; needed where connections genuinely contend for locks."""
    from playlist_engine.infrastructure.persistence.database import Database

    db = Database(f"sqlite:///{tmp_path / 'playlists.db'}")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def playlist_repository(in_memory_database):
    from playlist_engine.infrastructure.persistence.repositories.playlist_repository import (
        SQLitePlaylistRepository,
    )

    return SQLitePlaylistRepository(in_memory_database)


@pytest_asyncio.fixture
async def track_repository(in_memory_database):
    from playlist_engine.infrastructure.persistence.repositories.track_repository import (
        SQLiteTrackRepository,
    )

    return SQLiteTrackRepository(in_memory_database)


@pytest_asyncio.fixture
async def playback_repository(in_memory_database):
    from playlist_engine.infrastructure.persistence.repositories.playback_repository import (
        SQLitePlaybackRepository,
    )

    return SQLitePlaybackRepository(in_memory_database)


# ============================================================================
# Services
# ============================================================================


@pytest.fixture
def ordering_service(track_repository, publisher, clock):
    from playlist_engine.application.services.ordering_service import OrderingApplicationService

    return OrderingApplicationService(
        track_repository=track_repository, event_publisher=publisher, clock=clock
    )


@pytest.fixture
def vote_service(track_repository, publisher, clock):
    from playlist_engine.application.services.vote_service import VoteApplicationService
    from playlist_engine.config.settings import VotingSettings

    return VoteApplicationService(
        track_repository=track_repository,
        event_publisher=publisher,
        settings=VotingSettings(),
        clock=clock,
    )


@pytest.fixture
def playback_service(playback_repository, publisher, clock):
    from playlist_engine.application.services.playback_service import PlaybackApplicationService

    return PlaybackApplicationService(
        playback_repository=playback_repository, event_publisher=publisher, clock=clock
    )


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def playlist(playlist_repository, clock):
    """A public playlist owned by ``owner-1`` with edit mode ``everyone``."""
    from playlist_engine.domain.playlist.entities import Playlist

    return await playlist_repository.create(
        Playlist(id="pl-1", owner_id="owner-1", name="Road Trip", created_at=clock())
    )


def make_draft(title: str, **kwargs):
    from playlist_engine.domain.playlist.entities import TrackDraft

    return TrackDraft(title=title, **kwargs)


@pytest.fixture
def add_tracks(track_repository, clock):
    """Insert tracks by title and return them keyed by title."""

    async def _add(playlist_id: str, *titles: str, duration_ms: int = 0):
        created = {}
        for title in titles:
            created[title] = await track_repository.insert(
                playlist_id, make_draft(title, duration_ms=duration_ms), created_at=clock()
            )
        return created

    return _add


@pytest.fixture
def order_of(track_repository):
    """Titles of a playlist's tracks in position order, with positions checked."""

    async def _order(playlist_id: str) -> list[str]:
        tracks = await track_repository.list_for_playlist(playlist_id)
        assert [t.position for t in tracks] == list(range(len(tracks)))
        return [t.title for t in tracks]

    return _order
