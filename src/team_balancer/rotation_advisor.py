"""Swap suggestions for reserve players.

For each reserve, every assigned player is ranked by attribute-space
distance; the closest ones are the most natural substitutions.
"""

import logging
from typing import List, Sequence

from src.team_balancer.config import DEFAULT_TOP_N
from src.team_balancer.distance import player_distance
from src.team_balancer.models import AttributeVector, ReserveEntry, SuggestionEntry, Team

logger = logging.getLogger(__name__)


def rank_swap_candidates(
    reserve: AttributeVector, teams: Sequence[Team]
) -> List[SuggestionEntry]:
    """All assigned players ordered by distance to ``reserve``.

    Ties fall back to team number, then roster position.
    """
    candidates = [
        SuggestionEntry(
            team_number=team.number,
            player=member,
            distance=player_distance(reserve, member),
        )
        for team in teams
        for member in team.members
    ]
    candidates.sort(
        key=lambda s: (s.distance, s.team_number, s.player.roster_index)
    )
    return candidates


def suggest_rotations(
    teams: Sequence[Team],
    reserves: Sequence[AttributeVector],
    top_n: int = DEFAULT_TOP_N,
) -> List[ReserveEntry]:
    """Pair each reserve with its ``top_n`` closest assigned players.

    Output order matches ``reserves``. Neither input is modified.
    """
    limit = max(top_n, 0)
    entries = [
        ReserveEntry(
            player=reserve,
            suggestions=rank_swap_candidates(reserve, teams)[:limit],
        )
        for reserve in reserves
    ]
    logger.debug(
        "Generated rotation suggestions for %d reserves (top %d)",
        len(entries), limit,
    )
    return entries
