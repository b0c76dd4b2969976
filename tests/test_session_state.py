"""Tests for the balancing session data model."""

from datetime import datetime, timedelta, timezone

import pytest

from src.balancing_session.session_state import BalancingSession, SessionStatus

FIXED_NOW = datetime(2025, 3, 1, 18, 0, tzinfo=timezone.utc)


class TestCreateNew:
    def test_starts_open(self):
        session = BalancingSession.create_new("g1", "org1")
        assert session.status == SessionStatus.OPEN
        assert session.is_open
        assert not session.is_balancing
        assert not session.is_completed

    def test_records_ids_as_strings(self):
        session = BalancingSession.create_new(42, 7)
        assert session.game_id == "42"
        assert session.organizer_id == "7"

    def test_sets_created_at(self):
        session = BalancingSession.create_new("g1", "org1")
        assert session.created_at is not None
        assert session.created_at.tzinfo is not None

    def test_nothing_started_yet(self):
        session = BalancingSession.create_new("g1", "org1", team_size=6)
        assert session.team_size == 6
        assert session.started_by is None
        assert session.expires_at is None
        assert session.teams == []

    @pytest.mark.parametrize("game_id,organizer_id", [("", "org1"), ("g1", "  ")])
    def test_blank_ids_rejected(self, game_id, organizer_id):
        with pytest.raises(ValueError):
            BalancingSession.create_new(game_id, organizer_id)


class TestStatusValues:
    def test_string_values(self):
        assert SessionStatus.OPEN.value == "open"
        assert SessionStatus.BALANCING.value == "balancing"
        assert SessionStatus.COMPLETED.value == "completed"

    def test_lookup_by_value(self):
        assert SessionStatus("balancing") is SessionStatus.BALANCING


class TestIsExpired:
    def _balancing_session(self):
        session = BalancingSession.create_new("g1", "org1")
        session.status = SessionStatus.BALANCING
        session.expires_at = FIXED_NOW + timedelta(hours=3)
        return session

    def test_before_deadline(self):
        session = self._balancing_session()
        assert session.is_expired(FIXED_NOW + timedelta(hours=2)) is False

    def test_at_deadline(self):
        session = self._balancing_session()
        assert session.is_expired(FIXED_NOW + timedelta(hours=3)) is True

    def test_open_session_never_expires(self):
        session = BalancingSession.create_new("g1", "org1")
        assert session.is_expired(FIXED_NOW + timedelta(days=30)) is False

    def test_completed_session_never_expires(self):
        session = self._balancing_session()
        session.status = SessionStatus.COMPLETED
        assert session.is_expired(FIXED_NOW + timedelta(days=1)) is False

    def test_naive_now_treated_as_utc(self):
        session = self._balancing_session()
        naive_deadline = datetime(2025, 3, 1, 21, 0)
        assert session.is_expired(naive_deadline - timedelta(minutes=1)) is False
        assert session.is_expired(naive_deadline) is True

    def test_other_timezone_compared_as_instant(self):
        session = self._balancing_session()
        brasilia = timezone(timedelta(hours=-3))
        assert session.is_expired(datetime(2025, 3, 1, 17, 59, tzinfo=brasilia)) is False
        assert session.is_expired(datetime(2025, 3, 1, 18, 0, tzinfo=brasilia)) is True
