"""Roster normalization - raw player records to attribute vectors.

Accepts :class:`Player` instances or plain mappings keyed by
``player_id``, ``name``, ``height``, ``pass_score``, ``attack_score`` and
``set_score``. Missing values (absent keys, ``None`` or NaN) fall back to
the configured defaults.
"""

import logging
import math
import numbers
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, List, Mapping, Sequence, Union

from src.team_balancer.config import DEFAULT_HEIGHT, DEFAULT_SKILL_RATING
from src.team_balancer.errors import InvalidRosterError
from src.team_balancer.models import AttributeVector, Player

logger = logging.getLogger(__name__)

RawPlayer = Union[Player, Mapping[str, Any]]

_SKILL_FIELDS = ("pass_score", "attack_score", "set_score")


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _as_record(raw: RawPlayer, index: int) -> Dict[str, Any]:
    if is_dataclass(raw) and not isinstance(raw, type):
        return asdict(raw)
    if isinstance(raw, Mapping):
        return dict(raw)
    raise InvalidRosterError(
        f"Roster entry {index} must be a Player or a mapping, "
        f"got {type(raw).__name__}"
    )


def _parse_rating(value, field_name: str, player_id: str) -> int:
    if _is_missing(value):
        return DEFAULT_SKILL_RATING
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, str)):
        raise InvalidRosterError(
            f"Player {player_id}: {field_name} must be numeric, got {value!r}"
        )
    try:
        number = float(value)
    except ValueError as e:
        raise InvalidRosterError(
            f"Player {player_id}: {field_name} must be numeric, got {value!r}"
        ) from e
    if not number.is_integer():
        raise InvalidRosterError(
            f"Player {player_id}: {field_name} must be a whole number, got {value!r}"
        )
    return int(number)


def _parse_height(value, player_id: str) -> float:
    if _is_missing(value):
        return DEFAULT_HEIGHT
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, str)):
        raise InvalidRosterError(
            f"Player {player_id}: height must be numeric, got {value!r}"
        )
    try:
        height = float(value)
    except ValueError as e:
        raise InvalidRosterError(
            f"Player {player_id}: height must be numeric, got {value!r}"
        ) from e
    if math.isnan(height):
        return DEFAULT_HEIGHT
    if not math.isfinite(height):
        raise InvalidRosterError(
            f"Player {player_id}: height must be finite, got {value!r}"
        )
    if height < 0:
        raise InvalidRosterError(
            f"Player {player_id}: height cannot be negative ({height})"
        )
    return height


def validate_team_size(team_size) -> int:
    """Return ``team_size`` if it is a positive integer, else raise."""
    if isinstance(team_size, bool) or not isinstance(team_size, numbers.Integral):
        raise InvalidRosterError(
            f"Team size must be a positive integer, got {team_size!r}"
        )
    if team_size <= 0:
        raise InvalidRosterError(
            f"Team size must be a positive integer, got {team_size}"
        )
    return int(team_size)


def normalize_player(raw: RawPlayer, roster_index: int) -> AttributeVector:
    """Convert one raw record into an :class:`AttributeVector`."""
    record = _as_record(raw, roster_index)

    player_id = record.get("player_id")
    if _is_missing(player_id):
        raise InvalidRosterError(f"Roster entry {roster_index} has no player_id")
    player_id = str(player_id).strip()

    name = record.get("name")
    scores = {
        f: _parse_rating(record.get(f), f, player_id) for f in _SKILL_FIELDS
    }

    return AttributeVector(
        player_id=player_id,
        name="" if _is_missing(name) else str(name),
        height=_parse_height(record.get("height"), player_id),
        roster_index=roster_index,
        **scores,
    )


def normalize_roster(
    records: Sequence[RawPlayer], team_size: int
) -> List[AttributeVector]:
    """Normalize a roster, preserving input order.

    Args:
        records: Raw player records.
        team_size: Target players per team; validated here so callers
            get a single error type for bad input.

    Returns:
        One :class:`AttributeVector` per record, in input order.

    Raises:
        InvalidRosterError: Empty roster, non-positive team size, missing
            or duplicate ids, or malformed numeric fields.
    """
    validate_team_size(team_size)
    if not records:
        raise InvalidRosterError("Roster is empty")

    vectors: List[AttributeVector] = []
    seen = set()
    for index, raw in enumerate(records):
        vector = normalize_player(raw, index)
        if vector.player_id in seen:
            raise InvalidRosterError(
                f"Duplicate player_id {vector.player_id!r} in roster"
            )
        seen.add(vector.player_id)
        vectors.append(vector)

    logger.debug("Normalized %d players (team size %d)", len(vectors), team_size)
    return vectors
