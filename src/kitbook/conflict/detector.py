"""Double-booking detection.

The overlap rule lives on ``Interval.overlaps``; ``overlaps`` here is its
free-function form.  Everything else that asks "is this item taken?"
(availability queries, reserve) goes through ``first_conflict`` /
``find_conflicts`` below.
"""

from __future__ import annotations

from datetime import datetime
from typing import Collection, Iterable

from kitbook.interval import Interval
from kitbook.ledger.records import Reservation


def overlaps(a: Interval, b: Interval) -> bool:
    """Half-open overlap: touching intervals (one ends as the other starts) do not overlap."""
    return a.overlaps(b)


def find_conflicts(
    interval: Interval,
    reservations: Iterable[Reservation],
    now: datetime,
    exclude: Collection[str] = (),
) -> list[Reservation]:
    """Non-ended reservations (minus ``exclude`` ids) that overlap ``interval``."""
    return [
        res for res in reservations
        if res.id not in exclude
        and not res.is_ended(now)
        and overlaps(res.interval, interval)
    ]


def first_conflict(
    interval: Interval,
    reservations: Iterable[Reservation],
    now: datetime,
    exclude: Collection[str] = (),
) -> Reservation | None:
    for res in reservations:
        if res.id in exclude or res.is_ended(now):
            continue
        if overlaps(res.interval, interval):
            return res
    return None
