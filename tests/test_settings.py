"""
Unit Tests for Application Settings Configuration

Tests for:
- Default values
- Nested sections loaded from environment variables
- Custom validators (database URL, log level, events URL, providers)
- Settings caching and clearing
"""

import pytest
from pydantic import ValidationError

from playlist_engine.config.settings import (
    DatabaseSettings,
    LimitsSettings,
    RealtimeSettings,
    SchedulerSettings,
    Settings,
    VotingSettings,
    clear_settings_cache,
    get_settings,
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Run each test from an empty directory so no .env file is picked up."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "ENVIRONMENT",
        "DEBUG",
        "LOG_LEVEL",
        "DATABASE__URL",
        "SCHEDULER__TICK_INTERVAL_MS",
        "SCHEDULER__ENABLED",
        "VOTING__ALLOW_REPEAT_VOTES",
        "LIMITS__ALLOWED_PROVIDERS",
        "REALTIME__EVENTS_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Section defaults and validators
# =============================================================================


class TestDatabaseSettings:
    def test_defaults(self):
        """Should default to a file database under data/."""
        db = DatabaseSettings()

        assert db.url == "sqlite:///data/playlists.db"
        assert db.busy_timeout_ms == 5000
        assert db.connection_timeout_s == 10

    @pytest.mark.parametrize("url", [":memory:", "sqlite:///tmp/x.db", "sqlite://"])
    def test_accepts_sqlite_urls(self, url):
        """Should accept SQLite URLs and the in-memory marker."""
        assert DatabaseSettings(url=url).url == url

    def test_rejects_other_databases(self):
        """Should reject non-SQLite URLs."""
        with pytest.raises(ValidationError):
            DatabaseSettings(url="postgresql://user@localhost/db")

    def test_busy_timeout_bounds(self):
        """Should enforce the busy timeout range."""
        with pytest.raises(ValidationError):
            DatabaseSettings(busy_timeout_ms=10)

    def test_frozen(self):
        """Should be immutable once built."""
        db = DatabaseSettings()

        with pytest.raises(ValidationError):
            db.url = ":memory:"


class TestSchedulerSettings:
    def test_defaults(self):
        """Should tick every 500ms by default."""
        scheduler = SchedulerSettings()

        assert scheduler.enabled
        assert scheduler.tick_interval_ms == 500

    def test_interval_bounds(self):
        """Should reject intervals outside 50..60000 ms."""
        with pytest.raises(ValidationError):
            SchedulerSettings(tick_interval_ms=10)
        with pytest.raises(ValidationError):
            SchedulerSettings(tick_interval_ms=120_000)


class TestLimitsSettings:
    def test_defaults(self):
        """Should use the standard input limits."""
        limits = LimitsSettings()

        assert limits.max_title_length == 300
        assert limits.max_artist_length == 200
        assert limits.allowed_providers == ("youtube",)

    def test_providers_from_comma_string(self):
        """Should split, trim and lowercase a comma-separated provider list."""
        limits = LimitsSettings(allowed_providers=" YouTube, soundcloud ,")

        assert limits.allowed_providers == ("youtube", "soundcloud")


class TestRealtimeSettings:
    def test_blank_url_disables_http(self):
        """Should treat a blank events URL as unset."""
        assert RealtimeSettings(events_url="  ").events_url is None

    def test_rejects_non_http_url(self):
        """Should only accept http and https endpoints."""
        with pytest.raises(ValidationError):
            RealtimeSettings(events_url="redis://localhost:6379")

    def test_accepts_https(self):
        """Should keep a valid https URL."""
        settings = RealtimeSettings(events_url="https://rt.example.com/events")

        assert settings.events_url == "https://rt.example.com/events"


# =============================================================================
# Settings
# =============================================================================


class TestSettings:
    def test_defaults(self):
        """Should build with every section defaulted."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.voting == VotingSettings()
        assert settings.realtime.events_url is None

    def test_log_level_normalized(self):
        """Should uppercase a valid log level."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Should reject unknown log levels."""
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_nested_env_vars(self, monkeypatch):
        """Should read nested sections from double-underscore variables."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("DATABASE__URL", ":memory:")
        monkeypatch.setenv("SCHEDULER__TICK_INTERVAL_MS", "250")
        monkeypatch.setenv("VOTING__ALLOW_REPEAT_VOTES", "false")
        monkeypatch.setenv("LIMITS__ALLOWED_PROVIDERS", '["youtube", "spotify"]')
        monkeypatch.setenv("REALTIME__EVENTS_URL", "http://realtime:8080/events")

        settings = Settings()

        assert settings.environment == "production"
        assert settings.database.url == ":memory:"
        assert settings.scheduler.tick_interval_ms == 250
        assert settings.voting.allow_repeat_votes is False
        assert settings.limits.allowed_providers == ("youtube", "spotify")
        assert settings.realtime.events_url == "http://realtime:8080/events"

    def test_env_file(self, tmp_path):
        """Should read values from a .env file in the working directory."""
        (tmp_path / ".env").write_text("LOG_LEVEL=warning\nSCHEDULER__ENABLED=false\n")

        settings = Settings()

        assert settings.log_level == "WARNING"
        assert settings.scheduler.enabled is False

    def test_invalid_env_value(self, monkeypatch):
        """Should fail on an invalid nested value."""
        monkeypatch.setenv("DATABASE__URL", "mysql://db")

        with pytest.raises(ValidationError):
            Settings()


class TestSettingsCache:
    def test_cached_instance(self):
        """Should return the same instance until the cache is cleared."""
        first = get_settings()

        assert get_settings() is first

        clear_settings_cache()
        assert get_settings() is not first

    def test_cache_ignores_later_env_changes(self, monkeypatch):
        """Should only pick up new environment values after clearing."""
        first = get_settings()
        monkeypatch.setenv("LOG_LEVEL", "ERROR")

        assert get_settings().log_level == first.log_level

        clear_settings_cache()
        assert get_settings().log_level == "ERROR"
