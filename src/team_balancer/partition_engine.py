"""Constrained greedy partition of a roster into balanced teams.

Every team first receives one setter-capable player (round-robin, strongest
first). The remaining players are then placed one at a time, strongest
first, on whichever non-full team raises the imbalance cost the least.
Placement is greedy and never revisited, so the result is balanced but not
guaranteed optimal.
"""

import logging
import math
import random
from typing import List, Sequence, Tuple

from src.team_balancer.config import (
    DEFAULT_WEIGHT_HEIGHT,
    DEFAULT_WEIGHT_SCORE,
    MIN_TEAMS,
    SETTER_THRESHOLD,
)
from src.team_balancer.cost import imbalance
from src.team_balancer.errors import (
    AllocationInvariantError,
    InsufficientPlayersError,
    InsufficientSettersError,
    InvalidRosterError,
)
from src.team_balancer.models import AttributeVector, Team
from src.team_balancer.roster_normalizer import validate_team_size

logger = logging.getLogger(__name__)


def _check_weight(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRosterError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidRosterError(f"{name} must be finite, got {value!r}")
    return float(value)


class PartitionEngine:
    """Allocates players into ``len(players) // team_size`` full teams.

    The engine holds configuration only; each :meth:`partition` call works
    on its own copies, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        team_size: int,
        weight_score: float = DEFAULT_WEIGHT_SCORE,
        weight_height: float = DEFAULT_WEIGHT_HEIGHT,
        setter_threshold: int = SETTER_THRESHOLD,
    ):
        self.team_size = validate_team_size(team_size)
        self.weight_score = _check_weight("weight_score", weight_score)
        self.weight_height = _check_weight("weight_height", weight_height)
        self.setter_threshold = setter_threshold

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def partition(
        self, players: Sequence[AttributeVector], rng: random.Random
    ) -> Tuple[List[Team], List[AttributeVector]]:
        """Split ``players`` into full teams plus reserves.

        Args:
            players: Normalized roster.
            rng: Source of randomness for the tie-breaking shuffle.

        Returns:
            ``(teams, reserves)``; teams are numbered from 1 and reserves
            keep the shuffled, descending-total order.

        Raises:
            InsufficientPlayersError: Fewer than ``MIN_TEAMS * team_size``
                players.
            InsufficientSettersError: Not enough setters even after
                promoting fallbacks.
            AllocationInvariantError: A team finished at the wrong size.
        """
        minimum = MIN_TEAMS * self.team_size
        if len(players) < minimum:
            raise InsufficientPlayersError(
                f"Need at least {minimum} players for {MIN_TEAMS} teams of "
                f"{self.team_size}, got {len(players)}"
            )

        num_teams = len(players) // self.team_size
        ordered = self._order_players(players, rng)

        setters, others = self._split_setters(ordered)
        if len(setters) < num_teams:
            setters, others = self._promote_fallback_setters(
                setters, others, num_teams, ordered
            )
        if len(setters) < num_teams:
            raise InsufficientSettersError(
                f"Need {num_teams} setters, only {len(setters)} available "
                f"after fallback"
            )

        teams = [Team(number=i + 1) for i in range(num_teams)]
        seeded = self._seed_setters(teams, setters)

        remaining = [p for p in ordered if p.player_id not in seeded]
        reserves = self._assign_remaining(teams, remaining)

        self._check_team_sizes(teams)

        logger.debug(
            "Partitioned %d players into %d teams of %d (%d reserves)",
            len(players), num_teams, self.team_size, len(reserves),
        )
        return teams, reserves

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    @staticmethod
    def _order_players(
        players: Sequence[AttributeVector], rng: random.Random
    ) -> List[AttributeVector]:
        """Shuffle, then stable-sort by total descending.

        The shuffle only decides the order among players tied on total.
        """
        ordered = list(players)
        rng.shuffle(ordered)
        ordered.sort(key=lambda p: p.total, reverse=True)
        return ordered

    def _split_setters(
        self, ordered: List[AttributeVector]
    ) -> Tuple[List[AttributeVector], List[AttributeVector]]:
        setters = [p for p in ordered if p.set_score >= self.setter_threshold]
        others = [p for p in ordered if p.set_score < self.setter_threshold]
        logger.debug("Setters: %d, non-setters: %d", len(setters), len(others))
        return setters, others

    @staticmethod
    def _promote_fallback_setters(
        setters: List[AttributeVector],
        others: List[AttributeVector],
        num_teams: int,
        ordered: List[AttributeVector],
    ) -> Tuple[List[AttributeVector], List[AttributeVector]]:
        """Move the best-setting non-setters into the setter pool.

        Candidates are ranked by set_score descending; the sort is stable,
        so ties keep their shuffled order. The combined pool is returned in
        the overall descending-total order.
        """
        needed = num_teams - len(setters)
        by_set_score = sorted(others, key=lambda p: p.set_score, reverse=True)
        promoted = by_set_score[:needed]
        promoted_ids = {p.player_id for p in promoted}

        logger.info(
            "Only %d setters for %d teams; promoting %s as fallback setters",
            len(setters), num_teams, [p.player_id for p in promoted],
        )

        position = {p.player_id: i for i, p in enumerate(ordered)}
        pool = sorted(setters + promoted, key=lambda p: position[p.player_id])
        rest = [p for p in others if p.player_id not in promoted_ids]
        return pool, rest

    @staticmethod
    def _seed_setters(teams: List[Team], setters: List[AttributeVector]) -> set:
        """Give each team one setter, strongest first.

        Setters beyond one per team are left for the cost-driven phase.
        Returns the ids of the seeded players.
        """
        seeded = set()
        for team, setter in zip(teams, setters):
            team.add_member(setter)
            seeded.add(setter.player_id)
        return seeded

    def _assign_remaining(
        self, teams: List[Team], remaining: List[AttributeVector]
    ) -> List[AttributeVector]:
        """Greedy placement by smallest marginal cost; overflow is reserve."""
        reserves: List[AttributeVector] = []

        scores = [float(t.total_score) for t in teams]
        heights = [t.total_height for t in teams]
        sizes = [t.size for t in teams]

        for player in remaining:
            open_slots = [i for i, size in enumerate(sizes) if size < self.team_size]
            if not open_slots:
                reserves.append(player)
                continue

            current = self._cost(scores, heights, sizes)
            best_index = open_slots[0]
            best_delta = float("inf")
            for i in open_slots:
                trial_scores = list(scores)
                trial_heights = list(heights)
                trial_sizes = list(sizes)
                trial_scores[i] += player.total
                trial_heights[i] += player.height
                trial_sizes[i] += 1
                delta = self._cost(trial_scores, trial_heights, trial_sizes) - current

                # Strict comparison keeps the lowest index on ties and skips NaN
                if delta < best_delta:
                    best_delta = delta
                    best_index = i

            teams[best_index].add_member(player)
            scores[best_index] += player.total
            heights[best_index] += player.height
            sizes[best_index] += 1
            logger.debug(
                "Placed %s (total %d) on team %d (delta %.4f)",
                player.player_id, player.total, best_index + 1, best_delta,
            )

        return reserves

    def _cost(self, scores, heights, sizes) -> float:
        mean_heights = [h / n if n else 0.0 for h, n in zip(heights, sizes)]
        return imbalance(scores, mean_heights, self.weight_score, self.weight_height)

    def _check_team_sizes(self, teams: List[Team]):
        for team in teams:
            if team.size != self.team_size:
                raise AllocationInvariantError(
                    f"Team {team.number} finished with {team.size} players, "
                    f"expected {self.team_size}"
                )
