from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from kitbook.errors import InvalidInterval


def coerce_instant(value: Any) -> datetime:
    """A timezone-aware datetime from a datetime or ISO-8601 string, else InvalidInterval."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidInterval(f"Not an ISO-8601 timestamp: {value!r}.") from exc
    if not isinstance(value, datetime):
        raise InvalidInterval(f"Expected a datetime; got {type(value).__name__}.")
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidInterval(f"Timestamp {value.isoformat()} has no timezone.")
    return value


@dataclass(frozen=True, slots=True)
class Interval:
    """
    Half-open time range ``[start, end)`` between two timezone-aware instants.

    Construction is the only validation point: an Interval that exists is
    always well formed, so downstream code never re-checks ``start < end``.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        start = coerce_instant(self.start)
        end = coerce_instant(self.end)
        if not start < end:
            raise InvalidInterval(
                f"Interval start must be before end; got [{start.isoformat()}, {end.isoformat()})."
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def coerce(cls, value: Interval | tuple[Any, Any] | list[Any]) -> Interval:
        """Accept an Interval or a ``(start, end)`` pair of datetimes / ISO strings."""
        if isinstance(value, Interval):
            return value
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(value[0], value[1])
        raise InvalidInterval(f"Cannot build an interval from {value!r}.")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    def overlaps(self, other: Interval) -> bool:
        """Touching intervals (one ends as the other starts) do not overlap."""
        return self.start < other.end and other.start < self.end

    def is_ended(self, now: datetime) -> bool:
        return self.end <= now

    def truncate(self, end: datetime) -> Interval:
        """Return a copy ending at ``end``; raises InvalidInterval if that empties it."""
        return Interval(self.start, end)

    def describe(self) -> str:
        fmt_time = "%H:%M"
        fmt_date = "%d/%m"
        if self.start.date() == self.end.date():
            return (
                f"on {self.start.strftime(fmt_date)} from "
                f"{self.start.strftime(fmt_time)} to {self.end.strftime(fmt_time)}"
            )
        return (
            f"from {self.start.strftime(fmt_date)} {self.start.strftime(fmt_time)} "
            f"to {self.end.strftime(fmt_date)} {self.end.strftime(fmt_time)}"
        )

    def __repr__(self) -> str:
        return f"Interval({self.start.isoformat()}, {self.end.isoformat()})"
