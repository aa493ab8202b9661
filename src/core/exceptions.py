"""Errors raised by the adaptive engine."""


class AdaptiveEngineError(Exception):
    """Base class for adaptive engine errors."""
    pass


class InputError(AdaptiveEngineError):
    """Raised when a request is rejected before any collaborator is called."""
    pass


class CollaboratorFailure(AdaptiveEngineError):
    """
    Raised when the history or candidate pool fetch fails.

    The original exception is chained as __cause__. The engine never retries;
    callers own retry and backoff policy.
    """
    pass
