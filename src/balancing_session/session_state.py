"""Balancing session data model - one per game."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from src.team_balancer.models import Team


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SessionStatus(str, Enum):
    """Lifecycle of a balancing attempt: open -> balancing -> completed."""

    OPEN = "open"
    BALANCING = "balancing"
    COMPLETED = "completed"


@dataclass
class BalancingSession:
    """State of the balancing attempt for a single game."""

    game_id: str
    organizer_id: str
    status: SessionStatus = SessionStatus.OPEN
    created_at: Optional[datetime] = None
    team_size: Optional[int] = None
    started_by: Optional[str] = None
    started_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    teams: List[Team] = field(default_factory=list)

    @classmethod
    def create_new(
        cls,
        game_id: str,
        organizer_id: str,
        team_size: Optional[int] = None,
    ) -> "BalancingSession":
        """Factory for the session created alongside a new game."""
        if not str(game_id).strip():
            raise ValueError("game_id cannot be empty")
        if not str(organizer_id).strip():
            raise ValueError("organizer_id cannot be empty")
        return cls(
            game_id=str(game_id),
            organizer_id=str(organizer_id),
            created_at=datetime.now(timezone.utc),
            team_size=team_size,
        )

    @property
    def is_open(self) -> bool:
        return self.status == SessionStatus.OPEN

    @property
    def is_balancing(self) -> bool:
        return self.status == SessionStatus.BALANCING

    @property
    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether a balancing session has passed its deadline.

        Advisory only: transitions never consult it. A naive ``now`` is
        taken to be UTC.
        """
        if not self.is_balancing or self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return _as_utc(now) >= _as_utc(self.expires_at)
