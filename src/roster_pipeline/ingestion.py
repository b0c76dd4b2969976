"""Roster ingestion from CSV and JSON exports.

Handles the quirks of hand-maintained roster files:
- Header names in English, camelCase or Portuguese
- JSON either as a bare list of records or wrapped in ``{"players": [...]}``
- Unknown extra columns (kept, ignored downstream)
"""

import json
import logging
from pathlib import Path

import pandas as pd

from src.roster_pipeline.config import COLUMN_ALIASES

logger = logging.getLogger(__name__)


class RosterIngestionError(Exception):
    """Raised when a roster file cannot be read."""


def canonical_column(name) -> str:
    """Map a raw header to its canonical column name.

    Examples:
        "Altura"   -> "height"
        "passScore" -> "pass_score"
        "Notes"    -> "notes"
    """
    key = str(name).strip().strip('"').lower()
    return COLUMN_ALIASES.get(key, key)


class RosterIngester:
    """Reads a roster file into a DataFrame with canonical column names."""

    SUPPORTED_SUFFIXES = {".csv", ".json"}

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> pd.DataFrame:
        """Read the roster file.

        Raises:
            RosterIngestionError: Missing file, unsupported format or
                unparseable content.
        """
        if not self.path.exists():
            raise RosterIngestionError(f"Roster file not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise RosterIngestionError(
                f"Unsupported roster format '{suffix}' "
                f"(expected one of {sorted(self.SUPPORTED_SUFFIXES)})"
            )

        logger.info("Reading roster: %s", self.path.name)
        try:
            if suffix == ".csv":
                df = self._read_csv()
            else:
                df = self._read_json()
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise RosterIngestionError(
                f"Failed to read roster {self.path}: {e}"
            ) from e

        df = df.rename(columns=canonical_column)
        if df.columns.duplicated().any():
            dupes = sorted(set(df.columns[df.columns.duplicated()]))
            raise RosterIngestionError(
                f"Roster {self.path.name} maps several headers onto {dupes}"
            )

        logger.info("Loaded %d roster rows", len(df))
        return df

    def _read_csv(self) -> pd.DataFrame:
        # Keep everything as text so ids like "007" survive; the cleaner
        # parses numeric columns itself.
        return pd.read_csv(self.path, dtype=str, quotechar='"', skipinitialspace=True)

    def _read_json(self) -> pd.DataFrame:
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            if "players" not in data:
                raise ValueError("JSON roster object must have a 'players' key")
            data = data["players"]
        if not isinstance(data, list):
            raise ValueError("JSON roster must be a list of player records")

        return pd.DataFrame.from_records(data)
