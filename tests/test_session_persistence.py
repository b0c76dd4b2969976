"""Tests for session persistence - save/load balancing sessions to/from JSON."""

import json
from datetime import datetime, timedelta, timezone

from src.balancing_session.session_persistence import SessionPersistence
from src.balancing_session.session_state import BalancingSession, SessionStatus
from src.team_balancer.models import AttributeVector, Team

FIXED_NOW = datetime(2025, 3, 1, 18, 0, tzinfo=timezone.utc)


# ── Helpers ──────────────────────────────────────────────────────────


def _member(pid, index, height=180.0):
    return AttributeVector(
        player_id=pid,
        name=f"Player {pid}",
        height=height,
        pass_score=3,
        attack_score=4,
        set_score=5 if index == 0 else 2,
        roster_index=index,
    )


def _completed_session(game_id="g1"):
    session = BalancingSession.create_new(game_id, "org1", team_size=2)
    session.status = SessionStatus.COMPLETED
    session.created_at = FIXED_NOW
    session.started_by = "org1"
    session.started_at = FIXED_NOW
    session.expires_at = FIXED_NOW + timedelta(hours=3)
    session.completed_at = FIXED_NOW + timedelta(minutes=20)
    session.teams = [
        Team.from_members(1, [_member("a", 0, 190.0), _member("b", 3, 172.5)]),
        Team.from_members(2, [_member("c", 1), _member("d", 2)]),
    ]
    return session


# ── Save / load ──────────────────────────────────────────────────────


class TestSaveLoad:
    def test_creates_storage_dir(self, tmp_path):
        target = tmp_path / "nested" / "sessions"
        SessionPersistence(storage_dir=target)
        assert target.is_dir()

    def test_save_returns_path(self, persistence, tmp_storage):
        path = persistence.save_session(_completed_session())
        assert path == tmp_storage / "session_g1.json"
        assert path.exists()

    def test_saved_file_is_plain_json(self, persistence):
        path = persistence.save_session(_completed_session())
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["status"] == "completed"
        assert data["expires_at"] == "2025-03-01T21:00:00+00:00"
        assert data["teams"][0]["members"][1]["roster_index"] == 3

    def test_round_trip(self, persistence):
        saved = _completed_session()
        persistence.save_session(saved)
        loaded = persistence.load_session("g1")

        assert loaded.game_id == "g1"
        assert loaded.organizer_id == "org1"
        assert loaded.status == SessionStatus.COMPLETED
        assert loaded.team_size == 2
        assert loaded.started_by == "org1"
        assert loaded.created_at == FIXED_NOW
        assert loaded.expires_at == saved.expires_at
        assert loaded.completed_at == saved.completed_at

    def test_round_trip_teams(self, persistence):
        saved = _completed_session()
        persistence.save_session(saved)
        loaded = persistence.load_session("g1")

        assert [t.number for t in loaded.teams] == [1, 2]
        assert [t.player_ids() for t in loaded.teams] == [["a", "b"], ["c", "d"]]
        assert loaded.teams[0].members == saved.teams[0].members
        assert loaded.teams[0].total_score == saved.teams[0].total_score
        assert loaded.teams[0].total_height == 362.5

    def test_open_session_round_trip(self, persistence):
        session = BalancingSession.create_new("g7", "org9")
        persistence.save_session(session)
        loaded = persistence.load_session("g7")
        assert loaded.status == SessionStatus.OPEN
        assert loaded.started_at is None
        assert loaded.expires_at is None
        assert loaded.teams == []

    def test_save_overwrites(self, persistence):
        session = BalancingSession.create_new("g1", "org1")
        persistence.save_session(session)
        persistence.save_session(_completed_session())
        assert persistence.load_session("g1").status == SessionStatus.COMPLETED

    def test_missing_returns_none(self, persistence):
        assert persistence.load_session("nope") is None

    def test_corrupt_returns_none(self, persistence, tmp_storage):
        (tmp_storage / "session_bad.json").write_text("{not json", encoding="utf-8")
        assert persistence.load_session("bad") is None


# ── Listing / deleting ───────────────────────────────────────────────


class TestListDelete:
    def test_list_empty(self, persistence):
        assert persistence.list_sessions() == []

    def test_list_summaries(self, persistence):
        persistence.save_session(_completed_session("g1"))
        summaries = persistence.list_sessions()
        assert summaries == [
            {
                "game_id": "g1",
                "organizer_id": "org1",
                "status": "completed",
                "created_at": "2025-03-01T18:00:00+00:00",
                "expires_at": "2025-03-01T21:00:00+00:00",
                "team_count": 2,
            }
        ]

    def test_list_newest_first(self, persistence):
        older = _completed_session("old")
        newer = _completed_session("new")
        newer.created_at = FIXED_NOW + timedelta(days=1)
        persistence.save_session(older)
        persistence.save_session(newer)
        assert [s["game_id"] for s in persistence.list_sessions()] == ["new", "old"]

    def test_list_skips_corrupt(self, persistence, tmp_storage):
        persistence.save_session(_completed_session("g1"))
        (tmp_storage / "session_bad.json").write_text("[", encoding="utf-8")
        (tmp_storage / "session_partial.json").write_text("{}", encoding="utf-8")
        assert [s["game_id"] for s in persistence.list_sessions()] == ["g1"]

    def test_delete(self, persistence):
        persistence.save_session(_completed_session())
        assert persistence.delete_session("g1") is True
        assert persistence.load_session("g1") is None

    def test_delete_missing(self, persistence):
        assert persistence.delete_session("ghost") is False
