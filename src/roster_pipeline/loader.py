"""Roster loading - file to balancer-ready players.

Usage:
    players = load_roster(Path("roster.csv"), game_id="42")
"""

import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from src.roster_pipeline.cleaning import RosterCleaner
from src.roster_pipeline.ingestion import RosterIngester, RosterIngestionError
from src.team_balancer.models import Player

logger = logging.getLogger(__name__)


def filter_roster(
    df: pd.DataFrame,
    organizer_id: Optional[str] = None,
    game_id: Optional[str] = None,
) -> pd.DataFrame:
    """Keep rows rated by ``organizer_id`` and/or registered for ``game_id``.

    Raises:
        RosterIngestionError: A filter was requested but the roster has no
            matching column.
    """
    for column, value in (("organizer_id", organizer_id), ("game_id", game_id)):
        if value is None:
            continue
        if column not in df.columns:
            raise RosterIngestionError(
                f"Cannot filter by {column}: roster has no {column} column"
            )
        df = df[df[column] == str(value)]
        logger.info("Filtered roster to %s=%s: %d rows", column, value, len(df))
    return df.reset_index(drop=True)


def load_roster(
    path: Path,
    organizer_id: Optional[str] = None,
    game_id: Optional[str] = None,
) -> List[Player]:
    """Read, clean and filter a roster file.

    Args:
        path: CSV or JSON roster.
        organizer_id: Only ratings given by this organizer.
        game_id: Only players registered for this game.

    Returns:
        Players in file order, one per distinct player id.
    """
    cleaner = RosterCleaner()
    df = RosterIngester(path).read()
    df = cleaner.clean(df)
    df = filter_roster(df, organizer_id=organizer_id, game_id=game_id)
    df = cleaner.drop_duplicate_players(df)

    players = cleaner.to_players(df)
    logger.info("Roster ready: %d players from %s", len(players), Path(path).name)
    return players
