"""Shared fixtures for the team-balancer test suite."""

import random
from datetime import datetime, timezone

import pytest

from src.balancing_session.session_controller import BalancingSessionController
from src.balancing_session.session_persistence import SessionPersistence
from src.balancing_session.session_state import BalancingSession

FIXED_NOW = datetime(2025, 3, 1, 18, 0, tzinfo=timezone.utc)


class NoShuffle(random.Random):
    """Random source whose shuffle keeps the input order."""

    def shuffle(self, x):
        return None


def make_roster_records(count, setters=2, seed=0):
    """Build ``count`` raw player dicts, the first ``setters`` of them setters."""
    rng = random.Random(seed)
    records = []
    for i in range(count):
        records.append(
            {
                "player_id": f"p{i}",
                "name": f"Player {i}",
                "height": float(rng.randint(160, 200)),
                "pass_score": rng.randint(0, 5),
                "attack_score": rng.randint(0, 5),
                "set_score": rng.randint(4, 5) if i < setters else rng.randint(0, 3),
            }
        )
    return records


# ------------------------------------------------------------------
# In-memory factories
# ------------------------------------------------------------------

@pytest.fixture
def no_shuffle():
    return NoShuffle()


@pytest.fixture
def roster_factory():
    return make_roster_records


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def session():
    """A fresh open session for game g1 organized by org1."""
    return BalancingSession.create_new(game_id="g1", organizer_id="org1")


@pytest.fixture
def controller(fixed_clock):
    return BalancingSessionController(clock=fixed_clock)


# ------------------------------------------------------------------
# Filesystem fixtures
# ------------------------------------------------------------------

@pytest.fixture
def tmp_storage(tmp_path):
    """Temporary directory for session storage."""
    return tmp_path / "sessions"


@pytest.fixture
def persistence(tmp_storage):
    return SessionPersistence(storage_dir=tmp_storage)
