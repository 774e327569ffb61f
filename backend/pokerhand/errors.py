"""Error taxonomy for hand lifecycle operations."""

from __future__ import annotations


class HandLifecycleError(Exception):
    """Base class for errors raised by the hand lifecycle core."""


class InvalidStageError(HandLifecycleError):
    """A board reveal was requested out of order (skipped or repeated)."""


class InvalidConfigurationError(HandLifecycleError, ValueError):
    """Seating, button/blind assignment or blind schedule is unusable."""


class CollaboratorError(HandLifecycleError):
    """Persistence or card source could not satisfy a request."""


class RecordNotFoundError(CollaboratorError):
    """A game, player, hand or board referenced by id is not stored."""
