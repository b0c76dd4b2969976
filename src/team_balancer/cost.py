"""Imbalance cost over a set of teams.

The cost is a weighted sum of two population variances: team score totals
and team mean heights. Lower is better balanced.
"""

from typing import Sequence

from src.team_balancer.config import DEFAULT_WEIGHT_HEIGHT, DEFAULT_WEIGHT_SCORE
from src.team_balancer.models import Team


def population_variance(values: Sequence[float]) -> float:
    """Population variance; 0 for empty or single-element input."""
    if len(values) < 2:
        return 0.0
    mean = sum(values) / len(values)
    return sum((v - mean) * (v - mean) for v in values) / len(values)


def imbalance(
    score_totals: Sequence[float],
    mean_heights: Sequence[float],
    weight_score: float = DEFAULT_WEIGHT_SCORE,
    weight_height: float = DEFAULT_WEIGHT_HEIGHT,
) -> float:
    """Weighted cost from per-team score totals and mean heights."""
    return (
        weight_score * population_variance(score_totals)
        + weight_height * population_variance(mean_heights)
    )


def team_cost(
    teams: Sequence[Team],
    weight_score: float = DEFAULT_WEIGHT_SCORE,
    weight_height: float = DEFAULT_WEIGHT_HEIGHT,
) -> float:
    """Imbalance cost of ``teams``. Pure; independent of team order."""
    return imbalance(
        [t.total_score for t in teams],
        [t.mean_height for t in teams],
        weight_score,
        weight_height,
    )
