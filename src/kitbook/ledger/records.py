from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from kitbook.calendar import ShiftKind
from kitbook.interval import Interval


@dataclass(frozen=True, slots=True)
class Origin:
    """
    Why a reservation exists: a (task, shift) pair.

    Only ``task_id`` and ``shift`` take part in equality and hashing;
    ``task_title`` is display text and may change or collide.
    """

    task_id: str
    task_title: str = field(compare=False)
    shift: ShiftKind

    def __post_init__(self) -> None:
        if not self.task_id:
            raise ValueError("Origin task_id must not be empty.")
        object.__setattr__(self, "shift", ShiftKind(self.shift))

    @property
    def key(self) -> tuple[str, ShiftKind]:
        return (self.task_id, self.shift)


@dataclass(frozen=True, slots=True)
class Reservation:
    id: str
    item_id: str
    holder: str
    interval: Interval
    origin: Origin
    notes: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Reservation id must not be empty.")
        if not self.item_id:
            raise ValueError("Reservation item_id must not be empty.")
        if not self.holder:
            raise ValueError("Reservation holder must not be empty.")

    def is_ended(self, now: datetime) -> bool:
        return self.interval.is_ended(now)

    def held_by(self, holder: str, origin: Origin) -> bool:
        return self.holder == holder and self.origin == origin

    def with_holder(self, holder: str) -> Reservation:
        return replace(self, holder=holder)

    def with_interval(self, interval: Interval) -> Reservation:
        return replace(self, interval=interval)
