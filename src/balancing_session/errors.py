"""Errors raised by balancing session transitions."""


class SessionError(Exception):
    """Base class for rejected session transitions."""


class InvalidStateError(SessionError):
    """Raised when a transition is not allowed from the current status."""


class ForbiddenError(SessionError):
    """Raised when the requester may not perform the transition."""
