"""Domain services for the playlist bounded context.

Pure rules with no I/O: who may see or edit a playlist, where a moved track
may land, how queued tracks are ranked by votes, and how track input is
normalised.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypeVar

from playlist_engine.domain.playlist.entities import Playlist, TrackDraft
from playlist_engine.domain.playlist.value_objects import EditMode
from playlist_engine.domain.shared.exceptions import AccessDeniedError, ValidationError
from playlist_engine.domain.shared.messages import ErrorMessages
from playlist_engine.domain.shared.validators import validate_bounded_text


class PlaylistAccessPolicy:
    """Visibility and edit-mode rules."""

    @staticmethod
    def can_view(playlist: Playlist, user_id: str, *, is_member: bool) -> bool:
        if playlist.is_public:
            return True
        return playlist.is_owned_by(user_id) or is_member

    @staticmethod
    def can_edit(playlist: Playlist, user_id: str, *, is_member: bool) -> bool:
        if not PlaylistAccessPolicy.can_view(playlist, user_id, is_member=is_member):
            return False
        if playlist.is_owned_by(user_id):
            return True
        if playlist.edit_mode == EditMode.EVERYONE:
            return True
        return playlist.edit_mode == EditMode.INVITED and is_member

    @classmethod
    def ensure_can_view(cls, playlist: Playlist, user_id: str, *, is_member: bool) -> None:
        if not cls.can_view(playlist, user_id, is_member=is_member):
            raise AccessDeniedError("view", playlist.id)

    @classmethod
    def ensure_can_edit(cls, playlist: Playlist, user_id: str, *, is_member: bool) -> None:
        if not cls.can_edit(playlist, user_id, is_member=is_member):
            raise AccessDeniedError("edit", playlist.id)

    @staticmethod
    def ensure_owner(playlist: Playlist, user_id: str) -> None:
        if not playlist.is_owned_by(user_id):
            raise AccessDeniedError("manage", playlist.id)


class OrderingService:
    """Position arithmetic for manual moves."""

    @staticmethod
    def clamp_move_target(
        requested: int,
        *,
        total: int,
        is_queued: bool,
        first_queued_position: int | None,
    ) -> int:
        """Clamp a requested position into the range the track may occupy.

        The result lies in ``[0, total - 1]`` and inside the track's own
        segment: queued tracks stay at or after the first queued position,
        played and playing tracks stay before it.
        """
        if total <= 0:
            raise ValueError("total must be positive")

        target = min(max(requested, 0), total - 1)
        if first_queued_position is None:
            return target
        if is_queued:
            return max(target, first_queued_position)
        return max(min(target, first_queued_position - 1), 0)

    @staticmethod
    def shift_range(current: int, target: int) -> tuple[int, int, int] | None:
        """Return ``(low, high, delta)`` for the neighbours displaced by a move.

        Moving forward shifts ``(current, target]`` down by one; moving
        backward shifts ``[target, current)`` up by one.
        """
        if target > current:
            return current + 1, target, -1
        if target < current:
            return target, current - 1, 1
        return None


class _Votable(Protocol):
    @property
    def vote_count(self) -> int: ...

    @property
    def created_at(self) -> datetime: ...


V = TypeVar("V", bound=_Votable)


class VoteOrderingService:
    """Ranking of queued tracks by votes."""

    @staticmethod
    def rank(queued: Iterable[V]) -> list[V]:
        """Stable sort by vote count descending, then insertion time ascending.

        Callers pass tracks in their current position order so exact
        timestamp ties keep their existing relative order.
        """
        return sorted(queued, key=lambda t: (-t.vote_count, t.created_at))

    @staticmethod
    def assign_positions(ranked: Sequence[V], start: int) -> list[tuple[V, int]]:
        return [(track, start + offset) for offset, track in enumerate(ranked)]


@dataclass(frozen=True)
class PlaylistDetailsPolicy:
    max_name_length: int = 200
    max_description_length: int = 1000

    def normalize(self, *, name: str, description: str | None) -> tuple[str, str]:
        clean_name = validate_bounded_text(
            name,
            field_name="name",
            max_length=self.max_name_length,
            empty_message=ErrorMessages.EMPTY_PLAYLIST_NAME,
            too_long_message=ErrorMessages.PLAYLIST_NAME_TOO_LONG,
        )
        clean_description = validate_bounded_text(
            description or "",
            field_name="description",
            max_length=self.max_description_length,
            empty_message=None,
            too_long_message=ErrorMessages.DESCRIPTION_TOO_LONG,
        )
        return clean_name, clean_description


@dataclass(frozen=True)
class TrackDraftPolicy:
    """Normalises and validates incoming track metadata."""

    max_title_length: int = 300
    max_artist_length: int = 200
    allowed_providers: tuple[str, ...] = ("youtube",)

    def normalize(
        self,
        *,
        title: str,
        artist: str | None = None,
        provider: str | None = None,
        provider_track_id: str | None = None,
        thumbnail_url: str | None = None,
        duration_ms: int = 0,
    ) -> TrackDraft:
        clean_title = validate_bounded_text(
            title,
            field_name="title",
            max_length=self.max_title_length,
            empty_message=ErrorMessages.EMPTY_TRACK_TITLE,
            too_long_message=ErrorMessages.TRACK_TITLE_TOO_LONG,
        )
        clean_artist = validate_bounded_text(
            artist or "",
            field_name="artist",
            max_length=self.max_artist_length,
            empty_message=None,
            too_long_message=ErrorMessages.TRACK_ARTIST_TOO_LONG,
        )

        clean_provider = (provider or "").strip().lower() or None
        clean_provider_track_id = (provider_track_id or "").strip() or None
        if clean_provider is not None:
            if clean_provider not in self.allowed_providers:
                raise ValidationError(
                    ErrorMessages.UNSUPPORTED_PROVIDER.format(
                        provider=clean_provider, allowed=", ".join(self.allowed_providers)
                    ),
                    field="provider",
                )
            if clean_provider_track_id is None:
                raise ValidationError(
                    ErrorMessages.PROVIDER_TRACK_ID_REQUIRED, field="providerTrackId"
                )

        if duration_ms < 0:
            raise ValidationError(ErrorMessages.NEGATIVE_DURATION, field="durationMs")

        return TrackDraft(
            title=clean_title,
            artist=clean_artist,
            provider=clean_provider,
            provider_track_id=clean_provider_track_id,
            thumbnail_url=(thumbnail_url or "").strip() or None,
            duration_ms=duration_ms,
        )
