"""Balance a roster file from the command line.

Usage:
    python -m src.team_balancer.run_balance roster [team_size] [seed] [output]

Examples:
    python -m src.team_balancer.run_balance data/roster.csv 6
    python -m src.team_balancer.run_balance data/roster.csv 6 42 out/teams.json
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

from src.logging_config import setup_logging
from src.roster_pipeline.loader import load_roster
from src.team_balancer.balancer import balance_teams
from src.team_balancer.config import DEFAULT_TEAM_SIZE
from src.team_balancer.models import BalanceOptions, BalanceResult

logger = logging.getLogger(__name__)


def result_to_frame(result: BalanceResult) -> pd.DataFrame:
    """One row per player: team number (empty for reserves) and ratings."""
    rows = []
    for team in result.teams:
        for member in team.members:
            rows.append({"team": team.number, **member.to_dict()})
    for entry in result.reserves:
        rows.append({"team": None, **entry.player.to_dict()})

    df = pd.DataFrame(rows)
    if not df.empty:
        df["team"] = df["team"].astype("Int64")
    return df


def format_result(result: BalanceResult) -> str:
    """Human-readable summary of teams, reserves and swap suggestions."""
    df = result_to_frame(result)
    lines = [f"Seed: {result.seed}  Cost: {result.cost:.4f}", ""]

    for team in result.teams:
        members = df[df["team"] == team.number]
        lines.append(
            f"Team {team.number} (score {team.total_score}, "
            f"mean height {team.mean_height:.1f})"
        )
        lines.append(
            members[["player_id", "name", "height", "pass_score",
                     "attack_score", "set_score", "total"]].to_string(index=False)
        )
        lines.append("")

    if result.reserves:
        lines.append("Reserves")
        for entry in result.reserves:
            swaps = ", ".join(
                f"{s.player.player_id} (team {s.team_number}, {s.distance:.2f})"
                for s in entry.suggestions
            )
            lines.append(f"  {entry.player.player_id}: {swaps or '-'}")

    return "\n".join(lines)


def run_balance(
    roster_path: Path,
    team_size: int = DEFAULT_TEAM_SIZE,
    seed: Optional[int] = None,
    output_path: Optional[Path] = None,
) -> BalanceResult:
    """Load a roster, balance it and optionally write the result as JSON.

    Raises:
        RosterIngestionError: Roster file unreadable.
        BalancingError: Roster cannot be balanced.
    """
    logger.info("Balancing %s into teams of %d", roster_path, team_size)
    players = load_roster(roster_path)
    result = balance_teams(players, team_size, BalanceOptions(random_seed=seed))

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info("Wrote result to %s", output_path)

    return result


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    roster = Path(sys.argv[1])
    size = int(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_TEAM_SIZE
    run_seed = int(sys.argv[3]) if len(sys.argv) > 3 else None
    output = Path(sys.argv[4]) if len(sys.argv) > 4 else None

    try:
        balanced = run_balance(roster, size, run_seed, output)
        print(format_result(balanced))
    except Exception:
        logger.exception("Balancing failed")
        sys.exit(1)
