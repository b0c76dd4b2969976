"""Roster cleaning - standardize raw roster rows before balancing.

- Strip whitespace and quotes from text values
- Normalize identifiers to strings ("12", 12 and 12.0 are the same id)
- Parse numbers, accepting a decimal comma ("1,85" -> 1.85)
- Fill missing heights and ratings with the engine defaults
- Drop rows without an id and repeated ids
"""

import logging
from typing import List, Optional

import pandas as pd

from src.roster_pipeline.config import FILTER_COLUMNS, NUMERIC_COLUMNS, PLAYER_COLUMNS
from src.roster_pipeline.ingestion import RosterIngestionError
from src.team_balancer.config import DEFAULT_HEIGHT, DEFAULT_SKILL_RATING
from src.team_balancer.models import Player

logger = logging.getLogger(__name__)

_DEFAULTS = {
    "height": DEFAULT_HEIGHT,
    "pass_score": DEFAULT_SKILL_RATING,
    "attack_score": DEFAULT_SKILL_RATING,
    "set_score": DEFAULT_SKILL_RATING,
}


class RosterCleaner:
    """Cleans roster DataFrames produced by :class:`RosterIngester`."""

    # ------------------------------------------------------------------
    # Value helpers
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_id(value) -> Optional[str]:
        """Canonical string form of an identifier.

        Examples:
            12      -> "12"
            12.0    -> "12"
            " 007 " -> "007"
            ""      -> None
        """
        if value is None or pd.isna(value):
            return None
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        text = str(value).strip().strip('"')
        return text or None

    @staticmethod
    def parse_number(value) -> float:
        """Parse a number that may use a decimal comma.

        Examples:
            "1,85"    -> 1.85
            "1,234.5" -> 1234.5
            "abc"     -> nan
        """
        if value is None or pd.isna(value):
            return float("nan")
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        text = str(value).strip().strip('"')
        if "," in text:
            text = text.replace(",", "") if "." in text else text.replace(",", ".")
        if text == "":
            return float("nan")
        try:
            return float(text)
        except ValueError:
            return float("nan")

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        """Standardize a roster DataFrame.

        Rows without a player id are dropped. Missing numeric values are
        filled with defaults; duplicates are left for
        :meth:`drop_duplicate_players`.

        Raises:
            RosterIngestionError: The roster has rows but no player id column.
        """
        if df.empty:
            return pd.DataFrame(columns=PLAYER_COLUMNS + FILTER_COLUMNS)
        if "player_id" not in df.columns:
            raise RosterIngestionError("Roster has no player id column")

        out = df.copy()
        for col in out.columns:
            out[col] = out[col].apply(
                lambda v: v.strip().strip('"') if isinstance(v, str) else v
            )

        for col in ["player_id"] + FILTER_COLUMNS:
            if col in out.columns:
                out[col] = out[col].apply(self.normalize_id).astype(object)

        missing_id = out["player_id"].isna()
        if missing_id.any():
            logger.warning("Dropping %d roster rows with no player id", missing_id.sum())
            out = out[~missing_id]

        if "name" not in out.columns:
            out["name"] = ""
        out["name"] = out["name"].fillna("").astype(str)

        for col in NUMERIC_COLUMNS:
            if col in out.columns:
                out[col] = out[col].apply(self.parse_number)
            else:
                out[col] = float("nan")
            out[col] = out[col].fillna(_DEFAULTS[col])

        out = out.reset_index(drop=True)
        logger.info("Cleaned roster: %d rows", len(out))
        return out

    def drop_duplicate_players(self, df: pd.DataFrame) -> pd.DataFrame:
        """Keep the first row for each player id."""
        dupes = df["player_id"].duplicated(keep="first")
        if dupes.any():
            logger.warning(
                "Dropping %d duplicate roster rows: %s",
                dupes.sum(),
                df.loc[dupes, "player_id"].tolist(),
            )
            df = df[~dupes].reset_index(drop=True)
        return df

    def to_players(self, df: pd.DataFrame) -> List[Player]:
        """Convert cleaned rows to :class:`Player` records, in row order."""
        players = []
        for row in df.itertuples(index=False):
            players.append(
                Player(
                    player_id=row.player_id,
                    name=row.name,
                    height=float(row.height),
                    pass_score=_as_rating(row.pass_score),
                    attack_score=_as_rating(row.attack_score),
                    set_score=_as_rating(row.set_score),
                )
            )
        return players


def _as_rating(value):
    # Whole numbers become ints; anything else is left for the normalizer
    # to reject.
    number = float(value)
    return int(number) if number.is_integer() else number
