"""Balancing facade - roster in, teams and reserves out.

Orchestrates the normalizer, partition engine and rotation advisor for one
stateless run. Nothing is persisted here; the caller decides what to do with
the result (typically hand it to a balancing session's finalize step).
"""

import logging
import random
import secrets
from typing import Optional, Sequence

from src.team_balancer.cost import team_cost
from src.team_balancer.models import BalanceOptions, BalanceResult
from src.team_balancer.partition_engine import PartitionEngine
from src.team_balancer.roster_normalizer import RawPlayer, normalize_roster
from src.team_balancer.rotation_advisor import suggest_rotations

logger = logging.getLogger(__name__)


def balance_teams(
    players: Sequence[RawPlayer],
    team_size: int,
    options: Optional[BalanceOptions] = None,
) -> BalanceResult:
    """Split a roster into balanced teams and suggest reserve rotations.

    Args:
        players: Raw roster (``Player`` objects or mappings).
        team_size: Players per team.
        options: Cost weights, suggestion count and random seed. A missing
            seed is drawn from ``secrets`` and reported in the result.

    Returns:
        :class:`BalanceResult` with teams, annotated reserves, the final
        cost and the seed used.

    Raises:
        InvalidRosterError, InsufficientPlayersError,
        InsufficientSettersError, AllocationInvariantError.
    """
    options = options or BalanceOptions()
    seed = (
        options.random_seed
        if options.random_seed is not None
        else secrets.randbits(64)
    )

    vectors = normalize_roster(players, team_size)

    engine = PartitionEngine(
        team_size,
        weight_score=options.weight_score,
        weight_height=options.weight_height,
    )
    teams, reserves = engine.partition(vectors, random.Random(seed))
    reserve_entries = suggest_rotations(teams, reserves, options.top_n)
    cost = team_cost(teams, options.weight_score, options.weight_height)

    logger.info(
        "Balanced %d players into %d teams of %d (%d reserves, cost %.4f, seed %d)",
        len(vectors), len(teams), team_size, len(reserves), cost, seed,
    )
    return BalanceResult(teams=teams, reserves=reserve_entries, cost=cost, seed=seed)
