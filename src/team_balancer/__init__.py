from src.team_balancer.balancer import balance_teams
from src.team_balancer.cost import population_variance, team_cost
from src.team_balancer.distance import player_distance
from src.team_balancer.errors import (
    AllocationInvariantError,
    BalancingError,
    InsufficientPlayersError,
    InsufficientSettersError,
    InvalidRosterError,
)
from src.team_balancer.models import (
    AttributeVector,
    BalanceOptions,
    BalanceResult,
    Player,
    ReserveEntry,
    SuggestionEntry,
    Team,
)
from src.team_balancer.partition_engine import PartitionEngine
from src.team_balancer.roster_normalizer import normalize_roster
from src.team_balancer.rotation_advisor import suggest_rotations

__all__ = [
    "AllocationInvariantError",
    "AttributeVector",
    "BalanceOptions",
    "BalanceResult",
    "BalancingError",
    "InsufficientPlayersError",
    "InsufficientSettersError",
    "InvalidRosterError",
    "PartitionEngine",
    "Player",
    "ReserveEntry",
    "SuggestionEntry",
    "Team",
    "balance_teams",
    "normalize_roster",
    "player_distance",
    "population_variance",
    "suggest_rotations",
    "team_cost",
]
