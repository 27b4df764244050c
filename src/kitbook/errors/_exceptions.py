from __future__ import annotations

from typing import Any


class SchedulerError(Exception):
    """Base exception for all reservation scheduler errors."""


class InvalidInterval(SchedulerError, ValueError):
    """Raised for zero-length, inverted or timezone-naive intervals."""


class NotFoundError(SchedulerError, LookupError):
    """Raised when an item, reservation or holder/origin pair has nothing to act on."""


class RetiredItemError(SchedulerError):
    """Raised when a retired (inactive) item is requested."""

    def __init__(self, item: Any) -> None:
        self.item = item
        super().__init__(f"Equipment {getattr(item, 'name', item)!r} is retired.")


class ConflictError(SchedulerError):
    """
    Raised when a write would double-book an item.

    ``conflicting_item`` is the item that could not be booked and
    ``conflicting_reservation`` the reservation already holding it.
    """

    def __init__(
        self,
        conflicting_item: Any,
        conflicting_reservation: Any,
        message: str | None = None,
    ) -> None:
        self.conflicting_item = conflicting_item
        self.conflicting_reservation = conflicting_reservation
        if message is None:
            message = _describe_conflict(conflicting_item, conflicting_reservation)
        super().__init__(message)


class TransitionError(SchedulerError):
    """Raised when a task status change is not allowed for the caller's role."""


def _describe_conflict(item: Any, reservation: Any) -> str:
    name = getattr(item, "name", item)
    if reservation is None:
        return f"{name!r} cannot be reserved."
    return f"{name!r} is held by {reservation.holder} {reservation.interval.describe()}."
