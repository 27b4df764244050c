"""
kitbook.calendar
~~~~~~~~~~~~~~~~

Working-day arithmetic and daily shift windows.  A WorkCalendar maps dates to
"work" units via a cyclic weight pattern anchored at an epoch date, with
optional non-repeating holiday overrides.  A ShiftSchedule turns a day and a
shift (morning / afternoon) into a concrete interval.

Basic usage::

    from datetime import date
    from kitbook.calendar import WorkCalendar, ShiftSchedule, ShiftKind

    cal = WorkCalendar([1, 1, 1, 1, 1, 0, 0])         # Mon–Fri from 2024-01-01
    cal.add_holiday(date(2025, 3, 3))
    days = cal.working_days(date(2025, 3, 3), date(2025, 3, 9))
    windows = ShiftSchedule().windows(days, [ShiftKind.MORNING])

Public API
----------
WorkCalendar   Working-day calendar.
ShiftSchedule  Shift window factory.
ShiftKind      morning / afternoon.
ShiftWindow    (day, shift, interval) triple.
CalendarError  Base exception for all calendar-related errors.
"""

from __future__ import annotations

from kitbook.calendar._exceptions import CalendarError
from kitbook.calendar.calendar import WorkCalendar
from kitbook.calendar.shifts import ShiftKind, ShiftSchedule, ShiftWindow

__all__ = [
    "WorkCalendar",
    "ShiftSchedule",
    "ShiftKind",
    "ShiftWindow",
    "CalendarError",
]
