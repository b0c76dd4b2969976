"""Errors raised by the team-balancing engine."""


class BalancingError(Exception):
    """Base class for all balancing failures."""


class InvalidRosterError(BalancingError):
    """Raised when the roster or team size is empty or malformed."""


class InsufficientPlayersError(BalancingError):
    """Raised when the roster cannot fill the minimum number of teams."""


class InsufficientSettersError(BalancingError):
    """Raised when one setter per team cannot be guaranteed, even with fallbacks."""


class AllocationInvariantError(BalancingError):
    """Raised when a finished partition leaves a team at the wrong size.

    Indicates a bug in the allocator rather than bad input.
    """
