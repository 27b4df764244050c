from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from enum import Enum
from typing import Iterable, Sequence

from kitbook.config import ShiftDefaults
from kitbook.interval import Interval


class ShiftKind(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"


@dataclass(frozen=True, slots=True)
class ShiftWindow:
    day: date
    shift: ShiftKind
    interval: Interval


class ShiftSchedule:
    """Turns ``(day, shift)`` pairs into concrete, timezone-aware intervals."""

    def __init__(
        self,
        shifts: ShiftDefaults | None = None,
        tz: tzinfo = timezone.utc,
    ) -> None:
        self._shifts = shifts if shifts is not None else ShiftDefaults()
        self._tz = tz
        self._bounds: dict[ShiftKind, tuple[time, time]] = {
            ShiftKind.MORNING: (self._shifts.morning_start, self._shifts.morning_end),
            ShiftKind.AFTERNOON: (self._shifts.afternoon_start, self._shifts.afternoon_end),
        }

    def bounds(self, shift: ShiftKind) -> tuple[time, time]:
        return self._bounds[ShiftKind(shift)]

    def interval_for(self, day: date, shift: ShiftKind) -> Interval:
        start, end = self.bounds(shift)
        return Interval(
            datetime.combine(day, start, tzinfo=self._tz),
            datetime.combine(day, end, tzinfo=self._tz),
        )

    def windows(
        self,
        days: Iterable[date],
        shifts: Sequence[ShiftKind] = (ShiftKind.MORNING, ShiftKind.AFTERNOON),
    ) -> list[ShiftWindow]:
        return [
            ShiftWindow(day, ShiftKind(shift), self.interval_for(day, shift))
            for day in days
            for shift in shifts
        ]

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def __repr__(self) -> str:
        parts = ", ".join(
            f"{kind.value}={s.strftime('%H:%M')}-{e.strftime('%H:%M')}"
            for kind, (s, e) in self._bounds.items()
        )
        return f"ShiftSchedule({parts}, tz={self._tz})"
