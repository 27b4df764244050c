"""Central defaults for shift windows, the work calendar and the scheduler.

Values that a deployment is likely to adjust (shift boundaries, working
pattern, time zone) are collected here as frozen dataclasses so the
algorithmic modules never hard-code them.  ``SchedulerConfig.from_mapping``
builds a configuration from plain data such as a parsed settings file.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import date, time, timezone, tzinfo
from typing import Any, Mapping, Tuple
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class ShiftDefaults:
    """Daily shift windows; afternoon starts where morning ends."""

    morning_start: time = time(8, 0)
    morning_end: time = time(12, 0)
    afternoon_start: time = time(12, 0)
    afternoon_end: time = time(18, 30)

    def __post_init__(self) -> None:
        if not self.morning_start < self.morning_end <= self.afternoon_start < self.afternoon_end:
            raise ValueError(
                "Shift windows must be ordered and non-overlapping: "
                f"morning {self.morning_start}-{self.morning_end}, "
                f"afternoon {self.afternoon_start}-{self.afternoon_end}."
            )


@dataclass(frozen=True)
class CalendarDefaults:
    """Working-day pattern used to expand multi-day tasks into shifts."""

    pattern: Tuple[float, ...] = (1.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0)  # Mon-Fri
    epoch: date = date(2024, 1, 1)  # a Monday, aligns the weekly pattern
    buffer_days: int = 365 * 3


@dataclass(frozen=True)
class SchedulerConfig:
    timezone: str = "UTC"
    shifts: ShiftDefaults = field(default_factory=ShiftDefaults)
    calendar: CalendarDefaults = field(default_factory=CalendarDefaults)

    @property
    def tzinfo(self) -> tzinfo:
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SchedulerConfig":
        """
        Build a config from nested plain data.

        Times accept ``"HH:MM"`` strings, dates accept ``"YYYY-MM-DD"``.
        Unknown keys raise ValueError so typos do not silently fall back to
        defaults.
        """
        _reject_unknown(cls, data, "scheduler")
        config = cls()
        if "timezone" in data:
            config = replace(config, timezone=str(data["timezone"]))
        if "shifts" in data:
            config = replace(config, shifts=_shifts_from(data["shifts"]))
        if "calendar" in data:
            config = replace(config, calendar=_calendar_from(data["calendar"]))
        _ = config.tzinfo  # an unknown zone fails here, not on first use
        return config


def _reject_unknown(kind: type, data: Mapping[str, Any], label: str) -> None:
    known = {f.name for f in fields(kind)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {label} setting(s): {', '.join(unknown)}.")


def _as_time(value: Any) -> time:
    return value if isinstance(value, time) else time.fromisoformat(str(value))


def _as_date(value: Any) -> date:
    return value if isinstance(value, date) else date.fromisoformat(str(value))


def _shifts_from(data: Mapping[str, Any]) -> ShiftDefaults:
    _reject_unknown(ShiftDefaults, data, "shift")
    return ShiftDefaults(**{k: _as_time(v) for k, v in data.items()})


def _calendar_from(data: Mapping[str, Any]) -> CalendarDefaults:
    _reject_unknown(CalendarDefaults, data, "calendar")
    kwargs: dict[str, Any] = {}
    if "pattern" in data:
        kwargs["pattern"] = tuple(float(w) for w in data["pattern"])
    if "epoch" in data:
        kwargs["epoch"] = _as_date(data["epoch"])
    if "buffer_days" in data:
        kwargs["buffer_days"] = int(data["buffer_days"])
    return CalendarDefaults(**kwargs)


DEFAULT_CONFIG = SchedulerConfig()
