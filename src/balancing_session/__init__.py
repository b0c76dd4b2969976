from src.balancing_session.errors import ForbiddenError, InvalidStateError, SessionError
from src.balancing_session.session_controller import (
    BalancingSessionController,
    finalize_balancing,
    start_balancing,
)
from src.balancing_session.session_persistence import SessionPersistence
from src.balancing_session.session_state import BalancingSession, SessionStatus

__all__ = [
    "BalancingSession",
    "BalancingSessionController",
    "ForbiddenError",
    "InvalidStateError",
    "SessionError",
    "SessionPersistence",
    "SessionStatus",
    "finalize_balancing",
    "start_balancing",
]
