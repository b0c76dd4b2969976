"""Balancing session controller - guarded state transitions.

Transitions for the same game are serialized with a per-game lock so two
requests cannot both start, or both finalize, a session. Different games
never contend.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from src.balancing_session.config import BALANCING_EXPIRY
from src.balancing_session.errors import ForbiddenError, InvalidStateError
from src.balancing_session.session_state import BalancingSession, SessionStatus
from src.team_balancer.errors import InvalidRosterError
from src.team_balancer.models import Team

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BalancingSessionController:
    """Applies start/finalize transitions to balancing sessions.

    Args:
        persistence: Optional sink with a ``save_session(session)`` method,
            called after every transition. If it raises, the transition is
            undone and the error propagates.
        clock: Returns the current time; injectable for tests.
        expiry: Lifetime recorded on a session when balancing starts.
    """

    def __init__(
        self,
        persistence=None,
        clock: Optional[Callable[[], datetime]] = None,
        expiry: timedelta = BALANCING_EXPIRY,
    ):
        self.persistence = persistence
        self.clock = clock or _utc_now
        self.expiry = expiry
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def game_lock(self, game_id: str) -> Iterator[None]:
        """Hold the lock for ``game_id`` for the duration of the block.

        Locks are created on first use and dropped once the game's session
        completes.
        """
        with self._locks_guard:
            lock = self._locks.setdefault(str(game_id), threading.Lock())
        with lock:
            yield

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(
        self,
        session: BalancingSession,
        requester_id: str,
        team_size: Optional[int] = None,
    ) -> BalancingSession:
        """Move an open session to ``balancing``.

        Raises:
            InvalidStateError: Session is not open.
            ForbiddenError: Requester is not the game's organizer.
        """
        with self.game_lock(session.game_id):
            if session.status != SessionStatus.OPEN:
                logger.warning(
                    "Rejected start for game %s: status is %s",
                    session.game_id, session.status.value,
                )
                raise InvalidStateError(
                    f"Cannot start balancing game {session.game_id}: "
                    f"session is {session.status.value}"
                )
            if str(requester_id) != session.organizer_id:
                logger.warning(
                    "Rejected start for game %s: %s is not the organizer",
                    session.game_id, requester_id,
                )
                raise ForbiddenError(
                    f"Only the organizer can start balancing game {session.game_id}"
                )

            now = self.clock()
            changes = {
                "status": SessionStatus.BALANCING,
                "started_by": str(requester_id),
                "started_at": now,
                "expires_at": now + self.expiry,
            }
            if team_size is not None:
                changes["team_size"] = team_size
            self._commit(session, changes)

            logger.info(
                "Balancing started for game %s by %s (expires %s)",
                session.game_id, requester_id, session.expires_at.isoformat(),
            )
            return session

    def finalize(
        self,
        session: BalancingSession,
        requester_id: str,
        teams: Sequence[Team],
    ) -> BalancingSession:
        """Accept ``teams`` as the result and complete the session.

        Teams are renumbered 1..N in the order given.

        Raises:
            InvalidStateError: Session is not balancing.
            ForbiddenError: Requester did not start this balancing.
            InvalidRosterError: Teams are empty or share a player.
        """
        with self.game_lock(session.game_id):
            self._check_balancing_by(session, requester_id, "finalize")

            validated = self._validate_teams(session.game_id, teams)

            self._commit(
                session,
                {
                    "teams": validated,
                    "status": SessionStatus.COMPLETED,
                    "completed_at": self.clock(),
                },
            )
            self._forget_lock(session.game_id)

            logger.info(
                "Balancing finalized for game %s by %s: %d teams",
                session.game_id, requester_id, len(validated),
            )
            return session

    def update_teams(
        self,
        session: BalancingSession,
        requester_id: str,
        teams: Sequence[Team],
    ) -> BalancingSession:
        """Store an edited team set while still balancing.

        A player listed on more than one team is kept on the first and
        dropped from the rest.

        Raises:
            InvalidStateError: Session is not balancing.
            ForbiddenError: Requester did not start this balancing.
            InvalidRosterError: No teams, or a team ends up empty.
        """
        with self.game_lock(session.game_id):
            self._check_balancing_by(session, requester_id, "update teams for")
            if not teams:
                raise InvalidRosterError(
                    f"No teams supplied for game {session.game_id}"
                )

            seen = set()
            updated: List[Team] = []
            for number, team in enumerate(teams, start=1):
                members = []
                for member in team.members:
                    if member.player_id in seen:
                        logger.warning(
                            "Game %s: dropping duplicate player %s from team %d",
                            session.game_id, member.player_id, number,
                        )
                        continue
                    seen.add(member.player_id)
                    members.append(member)
                if not members:
                    raise InvalidRosterError(
                        f"Team {number} of game {session.game_id} has no players"
                    )
                updated.append(Team.from_members(number, members))

            self._commit(session, {"teams": updated})
            logger.info(
                "Updated draft teams for game %s: %d teams",
                session.game_id, len(updated),
            )
            return session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_balancing_by(
        session: BalancingSession, requester_id: str, action: str
    ):
        if session.status != SessionStatus.BALANCING:
            logger.warning(
                "Rejected %s game %s: status is %s",
                action, session.game_id, session.status.value,
            )
            raise InvalidStateError(
                f"Cannot {action} game {session.game_id}: "
                f"session is {session.status.value}"
            )
        if str(requester_id) != session.started_by:
            logger.warning(
                "Rejected %s game %s: %s did not start balancing",
                action, session.game_id, requester_id,
            )
            raise ForbiddenError(
                f"Only the organizer who started balancing can {action} "
                f"game {session.game_id}"
            )

    @staticmethod
    def _validate_teams(game_id: str, teams: Sequence[Team]) -> List[Team]:
        if not teams:
            raise InvalidRosterError(f"No teams supplied for game {game_id}")

        seen = set()
        validated = []
        for number, team in enumerate(teams, start=1):
            if not team.members:
                raise InvalidRosterError(
                    f"Team {number} of game {game_id} has no players"
                )
            for member in team.members:
                if member.player_id in seen:
                    raise InvalidRosterError(
                        f"Player {member.player_id} appears on more than one "
                        f"team in game {game_id}"
                    )
                seen.add(member.player_id)
            validated.append(Team.from_members(number, list(team.members)))
        return validated

    def _commit(self, session: BalancingSession, changes: Dict):
        """Apply ``changes`` and persist; restore the old values if saving fails."""
        previous = {name: getattr(session, name) for name in changes}
        for name, value in changes.items():
            setattr(session, name, value)
        if self.persistence is None:
            return
        try:
            self.persistence.save_session(session)
        except Exception:
            for name, value in previous.items():
                setattr(session, name, value)
            logger.error(
                "Failed to save session for game %s; changes rolled back",
                session.game_id,
            )
            raise

    def _forget_lock(self, game_id: str):
        # Completed is terminal, so a later caller holding a fresh lock can
        # only be rejected.
        with self._locks_guard:
            self._locks.pop(str(game_id), None)


_default_controller = BalancingSessionController()


def start_balancing(
    session: BalancingSession,
    requester_id: str,
    team_size: Optional[int] = None,
) -> BalancingSession:
    """Start balancing through the shared, non-persisting controller."""
    return _default_controller.start(session, requester_id, team_size)


def finalize_balancing(
    session: BalancingSession,
    requester_id: str,
    teams: Sequence[Team],
) -> BalancingSession:
    """Finalize balancing through the shared, non-persisting controller."""
    return _default_controller.finalize(session, requester_id, teams)
