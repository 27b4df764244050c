"""
kitbook.interval
~~~~~~~~~~~~~~~~

Half-open ``[start, end)`` time ranges.  Both ends must be timezone-aware, and
``start < end`` is enforced on construction.

Basic usage::

    from datetime import datetime, timezone
    from kitbook.interval import Interval

    utc = timezone.utc
    morning = Interval(datetime(2025, 3, 3, 8, tzinfo=utc),
                       datetime(2025, 3, 3, 12, tzinfo=utc))
    Interval.coerce(("2025-03-03T12:00:00Z", "2025-03-03T18:30:00Z"))
"""

from __future__ import annotations

from kitbook.errors import InvalidInterval
from kitbook.interval.interval import Interval, coerce_instant

__all__ = [
    "Interval",
    "InvalidInterval",
    "coerce_instant",
]
