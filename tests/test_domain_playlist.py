"""Unit tests for the playlist domain: rules, value objects and events."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from playlist_engine.domain.playlist.entities import Playlist, Track
from playlist_engine.domain.playlist.events import (
    PlayerStateChanged,
    PlaylistReordered,
    TrackAdded,
    TrackDeleted,
    TrackMoved,
    TrackVoteUpdated,
)
from playlist_engine.domain.playlist.services import (
    OrderingService,
    PlaylistAccessPolicy,
    PlaylistDetailsPolicy,
    TrackDraftPolicy,
    VoteOrderingService,
)
from playlist_engine.domain.playlist.value_objects import (
    DueAdvancement,
    EditMode,
    MoveOutcome,
    PlaybackStatus,
    PlayerState,
    TrackStatus,
)
from playlist_engine.domain.shared.exceptions import (
    AccessDeniedError,
    ConflictError,
    EntityNotFoundError,
    PersistenceError,
    ValidationError,
)

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def _playlist(**overrides) -> Playlist:
    data = {"id": "pl-1", "owner_id": "owner", "name": "Mix", "created_at": T0}
    data.update(overrides)
    return Playlist(**data)


def _track(track_id: str, *, votes: int = 0, created_offset_s: int = 0, position: int = 0) -> Track:
    return Track(
        id=track_id,
        playlist_id="pl-1",
        title=track_id.upper(),
        position=position,
        vote_count=votes,
        created_at=T0 + timedelta(seconds=created_offset_s),
    )


# =============================================================================
# Access rules
# =============================================================================


class TestPlaylistAccessPolicy:
    def test_public_playlist_visible_to_anyone(self):
        """Should let any user view a public playlist."""
        assert PlaylistAccessPolicy.can_view(_playlist(), "stranger", is_member=False)

    def test_private_playlist_hidden_from_strangers(self):
        """Should hide a private playlist from users who are neither owner nor invited."""
        playlist = _playlist(is_public=False)

        assert not PlaylistAccessPolicy.can_view(playlist, "stranger", is_member=False)
        assert PlaylistAccessPolicy.can_view(playlist, "owner", is_member=False)
        assert PlaylistAccessPolicy.can_view(playlist, "guest", is_member=True)

    def test_edit_mode_everyone_allows_any_viewer(self):
        """Should let any viewer edit when edit mode is everyone."""
        assert PlaylistAccessPolicy.can_edit(_playlist(), "stranger", is_member=False)

    def test_edit_mode_invited_requires_invitation(self):
        """Should restrict editing to owner and invitees when edit mode is invited."""
        playlist = _playlist(edit_mode=EditMode.INVITED)

        assert not PlaylistAccessPolicy.can_edit(playlist, "stranger", is_member=False)
        assert PlaylistAccessPolicy.can_edit(playlist, "guest", is_member=True)
        assert PlaylistAccessPolicy.can_edit(playlist, "owner", is_member=False)

    def test_private_everyone_playlist_still_needs_view_access(self):
        """Should not let a stranger edit a private playlist even in everyone mode."""
        playlist = _playlist(is_public=False, edit_mode=EditMode.EVERYONE)

        assert not PlaylistAccessPolicy.can_edit(playlist, "stranger", is_member=False)

    def test_ensure_helpers_raise_forbidden(self):
        """Should raise AccessDeniedError with a 403 status."""
        playlist = _playlist(is_public=False)

        with pytest.raises(AccessDeniedError) as exc_info:
            PlaylistAccessPolicy.ensure_can_view(playlist, "stranger", is_member=False)
        assert exc_info.value.status_code == 403

        with pytest.raises(AccessDeniedError):
            PlaylistAccessPolicy.ensure_owner(playlist, "guest")


# =============================================================================
# Ordering arithmetic
# =============================================================================


class TestOrderingService:
    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(0, 0), (2, 2), (3, 3), (10, 3), (-5, 0)],
    )
    def test_clamp_into_bounds(self, requested, expected):
        """Should clamp the target into [0, total-1] when every track is queued."""
        target = OrderingService.clamp_move_target(
            requested, total=4, is_queued=True, first_queued_position=0
        )
        assert target == expected

    def test_clamp_keeps_queued_track_after_played_segment(self):
        """Should not move a queued track in front of played or playing tracks."""
        target = OrderingService.clamp_move_target(
            0, total=5, is_queued=True, first_queued_position=2
        )
        assert target == 2

    def test_clamp_keeps_played_track_before_queue(self):
        """Should keep a played track inside the non-queued prefix."""
        target = OrderingService.clamp_move_target(
            4, total=5, is_queued=False, first_queued_position=2
        )
        assert target == 1

    def test_clamp_without_queued_tracks(self):
        """Should only apply the bounds when nothing is queued."""
        target = OrderingService.clamp_move_target(
            9, total=3, is_queued=False, first_queued_position=None
        )
        assert target == 2

    def test_clamp_rejects_empty_playlist(self):
        """Should refuse to compute a target for an empty playlist."""
        with pytest.raises(ValueError):
            OrderingService.clamp_move_target(0, total=0, is_queued=True, first_queued_position=0)

    def test_shift_range(self):
        """Should describe the displaced neighbours for each direction."""
        assert OrderingService.shift_range(0, 3) == (1, 3, -1)
        assert OrderingService.shift_range(2, 0) == (0, 1, 1)
        assert OrderingService.shift_range(1, 1) is None


# =============================================================================
# Vote ranking
# =============================================================================


class TestVoteOrderingService:
    def test_rank_by_votes_then_insertion_time(self):
        """Should order by votes descending, breaking ties by earliest insertion."""
        a = _track("a", created_offset_s=0)
        b = _track("b", votes=2, created_offset_s=1)
        c = _track("c", votes=1, created_offset_s=2)
        d = _track("d", votes=1, created_offset_s=3)

        ranked = VoteOrderingService.rank([a, b, c, d])

        assert [t.id for t in ranked] == ["b", "c", "d", "a"]

    def test_rank_is_stable_for_identical_keys(self):
        """Should keep the input order when votes and timestamps are equal."""
        first = _track("first")
        second = _track("second")

        assert VoteOrderingService.rank([first, second]) == [first, second]

    def test_assign_positions_from_start(self):
        """Should hand out consecutive positions beginning at start."""
        a, b = _track("a"), _track("b")

        assert VoteOrderingService.assign_positions([a, b], 3) == [(a, 3), (b, 4)]


# =============================================================================
# Input policies
# =============================================================================


class TestTrackDraftPolicy:
    def test_normalizes_fields(self):
        """Should trim text and lowercase the provider."""
        draft = TrackDraftPolicy().normalize(
            title="  Song  ",
            artist=" Band ",
            provider=" YouTube ",
            provider_track_id=" abc123 ",
            thumbnail_url="",
        )

        assert draft.title == "Song"
        assert draft.artist == "Band"
        assert draft.provider == "youtube"
        assert draft.provider_track_id == "abc123"
        assert draft.thumbnail_url is None

    def test_blank_title_rejected(self):
        """Should reject a whitespace-only title."""
        with pytest.raises(ValidationError) as exc_info:
            TrackDraftPolicy().normalize(title="   ")
        assert exc_info.value.field == "title"
        assert exc_info.value.status_code == 400

    def test_oversized_title_rejected(self):
        """Should reject titles longer than the configured limit."""
        with pytest.raises(ValidationError, match="300"):
            TrackDraftPolicy().normalize(title="x" * 301)

    def test_oversized_artist_rejected(self):
        """Should reject artists longer than the configured limit."""
        with pytest.raises(ValidationError):
            TrackDraftPolicy(max_artist_length=5).normalize(title="ok", artist="toolong")

    def test_unknown_provider_rejected(self):
        """Should reject providers outside the allow-list."""
        with pytest.raises(ValidationError, match="Unsupported provider"):
            TrackDraftPolicy().normalize(title="ok", provider="vimeo", provider_track_id="1")

    def test_provider_requires_track_id(self):
        """Should require providerTrackId once a provider is given."""
        with pytest.raises(ValidationError, match="providerTrackId"):
            TrackDraftPolicy().normalize(title="ok", provider="youtube")


class TestPlaylistDetailsPolicy:
    def test_trims_and_accepts_empty_description(self):
        """Should trim the name and allow an empty description."""
        assert PlaylistDetailsPolicy().normalize(name=" Mix ", description=None) == ("Mix", "")

    def test_rejects_empty_and_long_names(self):
        """Should reject blank and oversized names."""
        with pytest.raises(ValidationError):
            PlaylistDetailsPolicy().normalize(name=" ", description="")
        with pytest.raises(ValidationError):
            PlaylistDetailsPolicy(max_name_length=3).normalize(name="abcd", description="")


# =============================================================================
# Value objects
# =============================================================================


class TestValueObjects:
    def test_track_status_transitions(self):
        """Should only allow queued -> playing -> played."""
        assert TrackStatus.QUEUED.can_transition_to(TrackStatus.PLAYING)
        assert TrackStatus.PLAYING.can_transition_to(TrackStatus.PLAYED)
        assert not TrackStatus.PLAYED.can_transition_to(TrackStatus.QUEUED)
        assert not TrackStatus.QUEUED.can_transition_to(TrackStatus.PLAYED)

    def test_player_state_response(self):
        """Should render the player state in camelCase with a Z timestamp."""
        state = PlayerState(playlist_id="pl-1", current_track_id="t-1", playing_started_at=T0)

        assert state.status == PlaybackStatus.PLAYING
        assert state.to_response() == {
            "playlistId": "pl-1",
            "currentTrackId": "t-1",
            "playingStartedAt": "2024-01-01T12:00:00Z",
            "status": "playing",
        }

    def test_stopped_state(self):
        """Should report stopped with null fields."""
        body = PlayerState.stopped("pl-1").to_response()

        assert body["status"] == "stopped"
        assert body["currentTrackId"] is None
        assert body["playingStartedAt"] is None

    def test_move_outcome_response(self):
        """Should expose from/to in the response body."""
        outcome = MoveOutcome(track_id="t", from_position=2, to_position=0)

        assert not outcome.is_noop
        assert outcome.to_response() == {"trackId": "t", "from": 2, "to": 0}

    def test_due_advancement_requires_duration(self):
        """Should only describe tracks with a known positive duration."""
        item = DueAdvancement(
            playlist_id="pl", track_id="t", playing_started_at=T0, duration_ms=1500
        )

        assert item.duration_ms == 1500
        with pytest.raises(ValueError):
            DueAdvancement(playlist_id="pl", track_id="t", playing_started_at=T0, duration_ms=0)

    def test_naive_datetimes_rejected(self):
        """Should reject timezone-naive timestamps."""
        with pytest.raises(ValueError):
            PlayerState(
                playlist_id="pl", current_track_id="t", playing_started_at=datetime(2024, 1, 1)
            )


# =============================================================================
# Events
# =============================================================================


class TestPlaylistEvents:
    def test_envelopes(self):
        """Should render each event as a type/payload envelope."""
        track = _track("t-1")

        assert TrackAdded(playlist_id="pl-1", track=track).to_envelope() == {
            "type": "track.added",
            "payload": {"playlistId": "pl-1", "track": track.to_response()},
        }
        assert TrackMoved(
            playlist_id="pl-1", track_id="t-1", from_position=3, to_position=0
        ).to_envelope()["payload"] == {"playlistId": "pl-1", "trackId": "t-1", "from": 3, "to": 0}
        assert TrackDeleted(playlist_id="pl-1", track_id="t-1", position=1).to_envelope() == {
            "type": "track.deleted",
            "payload": {"playlistId": "pl-1", "trackId": "t-1", "position": 1},
        }
        assert TrackVoteUpdated(
            playlist_id="pl-1", track_id="t-1", vote_count=4
        ).to_envelope() == {
            "type": "track.updated",
            "payload": {"playlistId": "pl-1", "trackId": "t-1", "voteCount": 4},
        }
        assert PlaylistReordered(playlist_id="pl-1").to_envelope() == {
            "type": "playlist.reordered",
            "payload": {"playlistId": "pl-1"},
        }

    def test_player_state_changed_payload(self):
        """Should carry the full player state."""
        event = PlayerStateChanged.from_state(PlayerState.stopped("pl-1"))

        assert event.to_envelope() == {
            "type": "player.state_changed",
            "payload": {
                "playlistId": "pl-1",
                "currentTrackId": None,
                "playingStartedAt": None,
                "status": "stopped",
            },
        }


class TestExceptions:
    @pytest.mark.parametrize(
        ("error", "status", "code"),
        [
            (ValidationError("bad"), 400, "VALIDATION_ERROR"),
            (EntityNotFoundError("Track", "t"), 404, "ENTITY_NOT_FOUND"),
            (AccessDeniedError("edit", "pl"), 403, "FORBIDDEN"),
            (ConflictError("move"), 409, "CONFLICT"),
            (PersistenceError("disk"), 500, "INTERNAL"),
        ],
    )
    def test_status_codes(self, error, status, code):
        """Should map each error to its HTTP status and code."""
        assert error.status_code == status
        assert error.code == code

    def test_not_found_message(self):
        """Should build a default message from the entity type and id."""
        assert str(EntityNotFoundError("Playlist", "pl-9")) == "Playlist with id 'pl-9' not found"
