"""Centralized constants for database schema, SQL fragments and other shared values."""

from __future__ import annotations


class DatabaseTables:
    """Database table names."""

    PLAYLISTS = "playlists"
    TRACKS = "tracks"
    PLAYLIST_MEMBERS = "playlist_members"
    TRACK_VOTES = "track_votes"


class SQLPragmas:
    """SQLite PRAGMA statements for database configuration."""

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"
    PAGE_COUNT = "PRAGMA page_count"
    PAGE_SIZE = "PRAGMA page_size"


class SQLStatements:
    """Transaction control statements.

    Write transactions start with ``BEGIN IMMEDIATE`` so the write lock is
    taken before the first read, which serializes competing mutations.
    """

    BEGIN_IMMEDIATE = "BEGIN IMMEDIATE"
    COMMIT = "COMMIT"
    ROLLBACK = "ROLLBACK"


class OrderingConstants:
    """Values used when permuting the unique (playlist_id, position) column."""

    # Rows are parked at -(position + PARK_OFFSET) during a two-phase shift.
    PARK_OFFSET = 1_000_000
    # Slot for the moved track while its neighbours shift.
    MOVING_SLOT = -1


class DatabaseURLSchemes:
    SQLITE = "sqlite://"
    SQLITE_FILE = "sqlite:///"
    MEMORY = ":memory:"


class LogLevels:
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    ALL = frozenset({DEBUG, INFO, WARNING, ERROR, CRITICAL})


class EnvironmentTypes:
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"


class HTTPHeaders:
    CONTENT_TYPE = "Content-Type"
    USER_AGENT = "User-Agent"
    JSON = "application/json"
    USER_AGENT_VALUE = "playlist-engine/0.1"
