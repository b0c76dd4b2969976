"""Session persistence - save and load balancing sessions to/from JSON files."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from src.balancing_session.config import SESSIONS_DIR
from src.balancing_session.session_state import BalancingSession, SessionStatus
from src.team_balancer.models import AttributeVector, Team

logger = logging.getLogger(__name__)


def _to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _from_iso(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class SessionPersistence:
    """Stores one JSON file per game under ``storage_dir``."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or SESSIONS_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, game_id: str) -> Path:
        return self.storage_dir / f"session_{game_id}.json"

    def save_session(self, session: BalancingSession) -> Path:
        """Write ``session`` (including its teams) and return the file path."""
        filepath = self._path_for(session.game_id)

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self._session_to_dict(session), f, indent=2)

        logger.info(
            "Saved session for game %s (%s, %d teams) to %s",
            session.game_id, session.status.value, len(session.teams), filepath,
        )
        return filepath

    def load_session(self, game_id: str) -> Optional[BalancingSession]:
        """Load the session for ``game_id``; None if missing or corrupt."""
        filepath = self._path_for(game_id)

        if not filepath.exists():
            logger.warning("Session file not found: %s", filepath)
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt session file %s: %s", filepath, e)
            return None

        logger.info("Loaded session for game %s from %s", game_id, filepath)
        return self._dict_to_session(data)

    def list_sessions(self) -> List[Dict]:
        """Summaries of all saved sessions, most recently created first."""
        sessions = []

        for filepath in self.storage_dir.glob("session_*.json"):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)

                sessions.append(
                    {
                        "game_id": data["game_id"],
                        "organizer_id": data["organizer_id"],
                        "status": data["status"],
                        "created_at": data.get("created_at") or "",
                        "expires_at": data.get("expires_at"),
                        "team_count": len(data.get("teams", [])),
                    }
                )
            except (json.JSONDecodeError, OSError, KeyError) as e:
                logger.warning("Skipping corrupt session file %s: %s", filepath, e)
                continue

        return sorted(sessions, key=lambda x: x["created_at"], reverse=True)

    def delete_session(self, game_id: str) -> bool:
        """Delete a saved session. Returns False if it did not exist."""
        filepath = self._path_for(game_id)
        if not filepath.exists():
            return False

        filepath.unlink()
        logger.info("Deleted session for game %s", game_id)
        return True

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _session_to_dict(self, session: BalancingSession) -> Dict:
        return {
            "game_id": session.game_id,
            "organizer_id": session.organizer_id,
            "status": session.status.value,
            "created_at": _to_iso(session.created_at),
            "team_size": session.team_size,
            "started_by": session.started_by,
            "started_at": _to_iso(session.started_at),
            "expires_at": _to_iso(session.expires_at),
            "completed_at": _to_iso(session.completed_at),
            "teams": [
                {
                    "number": team.number,
                    "total_score": team.total_score,
                    "total_height": team.total_height,
                    "members": [
                        {
                            "player_id": m.player_id,
                            "name": m.name,
                            "height": m.height,
                            "pass_score": m.pass_score,
                            "attack_score": m.attack_score,
                            "set_score": m.set_score,
                            "roster_index": m.roster_index,
                        }
                        for m in team.members
                    ],
                }
                for team in session.teams
            ],
        }

    def _dict_to_session(self, data: Dict) -> BalancingSession:
        teams = [
            Team.from_members(
                td["number"],
                [
                    AttributeVector(
                        player_id=md["player_id"],
                        name=md.get("name", ""),
                        height=md["height"],
                        pass_score=md["pass_score"],
                        attack_score=md["attack_score"],
                        set_score=md["set_score"],
                        roster_index=md.get("roster_index", i),
                    )
                    for i, md in enumerate(td["members"])
                ],
            )
            for td in data.get("teams", [])
        ]

        return BalancingSession(
            game_id=data["game_id"],
            organizer_id=data["organizer_id"],
            status=SessionStatus(data["status"]),
            created_at=_from_iso(data.get("created_at")),
            team_size=data.get("team_size"),
            started_by=data.get("started_by"),
            started_at=_from_iso(data.get("started_at")),
            expires_at=_from_iso(data.get("expires_at")),
            completed_at=_from_iso(data.get("completed_at")),
            teams=teams,
        )
