"""
kitbook.errors
~~~~~~~~~~~~~~

Exception taxonomy shared by every scheduler component.

``InvalidInterval`` is a caller error and is raised before the ledger is
touched.  ``ConflictError`` is the expected, user-facing outcome of trying to
book something that is already taken.  ``NotFoundError`` is raised when a
transfer or lookup has nothing to act on.  None of them leave partial state
behind.

Public API
----------
SchedulerError    Root of the hierarchy.
InvalidInterval   Malformed interval (also a ValueError).
ConflictError     Double booking; carries the conflicting item and reservation.
NotFoundError     Nothing to act on (also a LookupError).
RetiredItemError  The requested item is no longer in service.
TransitionError   Task status change refused.
"""

from __future__ import annotations

from kitbook.errors._exceptions import (
    ConflictError,
    InvalidInterval,
    NotFoundError,
    RetiredItemError,
    SchedulerError,
    TransitionError,
)

__all__ = [
    "SchedulerError",
    "InvalidInterval",
    "ConflictError",
    "NotFoundError",
    "RetiredItemError",
    "TransitionError",
]
