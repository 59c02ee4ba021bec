"""Centralized message constants for error messages and log templates."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track validation
    EMPTY_TRACK_TITLE = "Track title cannot be empty"
    TRACK_TITLE_TOO_LONG = "Track title cannot exceed {limit} characters"
    TRACK_ARTIST_TOO_LONG = "Track artist cannot exceed {limit} characters"
    UNSUPPORTED_PROVIDER = "Unsupported provider '{provider}'. Allowed: {allowed}"
    PROVIDER_TRACK_ID_REQUIRED = "providerTrackId is required when provider is set"
    NEGATIVE_DURATION = "Track duration cannot be negative"

    # Ordering
    NEGATIVE_POSITION = "newPosition must be zero or greater"
    MOVE_ON_EMPTY_PLAYLIST = "Cannot move a track in an empty playlist"

    # Playlist validation
    EMPTY_PLAYLIST_NAME = "Playlist name cannot be empty"
    PLAYLIST_NAME_TOO_LONG = "Playlist name cannot exceed {limit} characters"
    DESCRIPTION_TOO_LONG = "Playlist description cannot exceed {limit} characters"
    OWNER_CANNOT_BE_INVITED = "The playlist owner cannot be invited"

    # Identifiers

    # Time/Date
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"

    # Settings
    INVALID_DATABASE_URL = "Database URL must start with sqlite:// or be ':memory:'"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    INVALID_EVENTS_URL = "Realtime events URL must start with http:// or https://"

    # Persistence
    STORE_FAILURE = "Store operation failed: {error}"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"
    DATABASE_STATS_FAILED = "Failed to get database stats: %s"
    TRANSACTION_ROLLED_BACK = "Transaction rolled back: %s"

    # Ordering
    TRACK_INSERTED = "Inserted track %s into playlist %s at position %d"
    TRACK_MOVED = "Moved track %s in playlist %s from %d to %d"
    TRACK_MOVE_NOOP = "Move of track %s in playlist %s is a no-op at position %d"
    TRACK_DELETED = "Deleted track %s from playlist %s at position %d"

    # Voting
    VOTE_CAST = "Vote on track %s in playlist %s -> %d votes"
    VOTE_DUPLICATE_IGNORED = "User %s already voted for track %s; vote ignored"
    QUEUE_REORDERED = "Reordered %d queued tracks in playlist %s starting at %d"

    # Playback
    PLAYBACK_ADVANCED = "Playlist %s now playing track %s"
    PLAYBACK_STOPPED = "Playlist %s stopped: queue exhausted"
    PLAYBACK_ALREADY_ADVANCED = "Playlist %s already moved past track %s; skipping advance"
    PLAYBACK_STOPPED_ON_DELETE = "Playing track %s deleted; playlist %s stopped"

    # Scheduler
    SCHEDULER_STARTED = "Advancement scheduler started (interval=%.3fs)"
    SCHEDULER_STOPPED = "Advancement scheduler stopped"
    SCHEDULER_ALREADY_RUNNING = "Advancement scheduler already running"
    SCHEDULER_DUE = "Scheduler found %d playlists due for advancement"
    SCHEDULER_QUERY_FAILED = "Scheduler failed to query due playlists: %s"
    SCHEDULER_ADVANCE_FAILED = "Scheduler failed to advance playlist %s"
    SCHEDULER_TICK_FAILED = "Error during scheduler tick"

    # Events
    EVENT_PUBLISHED = "Published %s for playlist %s"
    EVENT_PUBLISH_FAILED = "Failed to publish %s for playlist %s: %s"
    EVENT_HTTP_REJECTED = "Realtime service rejected %s with HTTP %d"
    EVENT_HANDLER_FAILED = "Error in handler for %s: %s"

    # Playlists
    PLAYLIST_CREATED = "Created playlist %s for owner %s"
    PLAYLIST_UPDATED = "Updated playlist %s"
    MEMBER_INVITED = "Invited user %s to playlist %s"
    MEMBER_REMOVED = "Removed user %s from playlist %s"

    # Application lifecycle
    APP_STARTING = "Starting playlist engine (environment=%s)"
    APP_READY = "Playlist engine ready; waiting for shutdown signal"
    APP_SHUTDOWN_SIGNAL = "Received %s, shutting down"
    APP_STOPPED = "Playlist engine stopped"
    APP_FATAL_ERROR = "Fatal error: %s"
    LOGGING_CONFIG_FALLBACK = "Could not load %s, falling back to basic config"
    SHUTDOWN_STEP_FAILED = "Failed stopping %s: %r"
