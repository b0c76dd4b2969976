"""Data models for the team-balancing engine."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from src.team_balancer.config import (
    DEFAULT_HEIGHT,
    DEFAULT_SKILL_RATING,
    DEFAULT_TOP_N,
    DEFAULT_WEIGHT_HEIGHT,
    DEFAULT_WEIGHT_SCORE,
    SETTER_THRESHOLD,
)


@dataclass(frozen=True)
class Player:
    """A raw roster entry as supplied by the caller."""

    player_id: str
    name: str = ""
    height: float = DEFAULT_HEIGHT
    pass_score: int = DEFAULT_SKILL_RATING
    attack_score: int = DEFAULT_SKILL_RATING
    set_score: int = DEFAULT_SKILL_RATING


@dataclass(frozen=True)
class AttributeVector:
    """Normalized player used by every engine computation."""

    player_id: str
    name: str
    height: float
    pass_score: int
    attack_score: int
    set_score: int
    roster_index: int  # Position in the caller's roster (0-based)

    @property
    def total(self) -> int:
        """Primary strength metric."""
        return self.pass_score + self.attack_score + self.set_score

    @property
    def is_setter_capable(self) -> bool:
        return self.set_score >= SETTER_THRESHOLD

    def as_tuple(self) -> Tuple[float, int, int, int]:
        """Coordinates used for distance: (height, pass, attack, set)."""
        return (self.height, self.pass_score, self.attack_score, self.set_score)

    def to_dict(self) -> Dict:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "height": self.height,
            "pass_score": self.pass_score,
            "attack_score": self.attack_score,
            "set_score": self.set_score,
            "total": self.total,
        }


@dataclass
class Team:
    """A team under construction or a finished team."""

    number: int
    members: List[AttributeVector] = field(default_factory=list)
    total_score: int = 0
    total_height: float = 0.0

    @classmethod
    def from_members(cls, number: int, members: List[AttributeVector]) -> "Team":
        """Build a team with totals computed from ``members``."""
        team = cls(number=number)
        for member in members:
            team.add_member(member)
        return team

    def add_member(self, player: AttributeVector):
        """Append a player and update the running totals."""
        self.members.append(player)
        self.total_score += player.total
        self.total_height += player.height

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def mean_height(self) -> float:
        """Average member height (0 for an empty team)."""
        if not self.members:
            return 0.0
        return self.total_height / len(self.members)

    def player_ids(self) -> List[str]:
        return [m.player_id for m in self.members]

    def to_dict(self) -> Dict:
        return {
            "number": self.number,
            "total_score": self.total_score,
            "total_height": self.total_height,
            "players": [m.to_dict() for m in self.members],
        }


@dataclass(frozen=True)
class SuggestionEntry:
    """An assigned player a reserve could swap with."""

    team_number: int
    player: AttributeVector
    distance: float


@dataclass
class ReserveEntry:
    """A reserve player and its ranked swap suggestions."""

    player: AttributeVector
    suggestions: List[SuggestionEntry] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "player": self.player.to_dict(),
            "suggestions": [
                {
                    "team_number": s.team_number,
                    "player_id": s.player.player_id,
                    "name": s.player.name,
                    "distance": round(s.distance, 2),
                }
                for s in self.suggestions
            ],
        }


@dataclass
class BalanceOptions:
    """Tuning knobs for a single balancing run."""

    weight_score: float = DEFAULT_WEIGHT_SCORE
    weight_height: float = DEFAULT_WEIGHT_HEIGHT
    top_n: int = DEFAULT_TOP_N
    random_seed: Optional[int] = None


@dataclass
class BalanceResult:
    """Output of :func:`balance_teams`."""

    teams: List[Team]
    reserves: List[ReserveEntry]
    cost: float
    seed: int  # Seed actually used; replaying it reproduces the run

    def to_dict(self) -> Dict:
        return {
            "seed": self.seed,
            "cost": self.cost,
            "teams": [t.to_dict() for t in self.teams],
            "reserves": [r.to_dict() for r in self.reserves],
        }
