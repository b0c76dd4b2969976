"""Attribute-space distance between two players."""

import math

from src.team_balancer.models import AttributeVector


def player_distance(a: AttributeVector, b: AttributeVector) -> float:
    """Euclidean distance over (height, pass, attack, set)."""
    return math.hypot(*(x - y for x, y in zip(a.as_tuple(), b.as_tuple())))
