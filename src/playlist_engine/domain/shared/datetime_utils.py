"""Date/time helpers.

- Always store and operate on timezone-aware UTC datetimes.
- Timestamps are persisted as ISO 8601 text with an explicit offset.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from playlist_engine.domain.shared.messages import ErrorMessages


@dataclass(frozen=True, slots=True)
class UtcDateTime:
    """A tiny value-object wrapper around a timezone-aware UTC `datetime`."""

    dt: datetime

    def __post_init__(self) -> None:
        if self.dt.tzinfo is None:
            raise ValueError(ErrorMessages.TIMEZONE_REQUIRED_UTC_DATETIME)
        object.__setattr__(self, "dt", self.dt.astimezone(UTC))

    @classmethod
    def from_iso(cls, value: str) -> UtcDateTime:
        # Accepts: '...+00:00' or '...Z'
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return cls(datetime.fromisoformat(value))

    @property
    def iso(self) -> str:
        """RFC3339/ISO8601 with explicit offset (+00:00)."""
        return self.dt.isoformat()

    @property
    def iso_z(self) -> str:
        """RFC3339 with trailing 'Z', used in outbound JSON."""
        return self.dt.isoformat().replace("+00:00", "Z")


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(UTC)


def to_db(value: datetime | None) -> str | None:
    """Serialize a datetime for a TEXT column."""
    if value is None:
        return None
    return UtcDateTime(value).iso


def from_db(value: str | None) -> datetime | None:
    """Parse a TEXT column written by :func:`to_db`."""
    if not value:
        return None
    return UtcDateTime.from_iso(value).dt
