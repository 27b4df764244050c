import logging
from datetime import date, timedelta
from typing import Optional, Sequence

import numpy as np

from ._exceptions import CalendarError

logger = logging.getLogger(__name__)


class WorkCalendar:
    """
    Compiled work calendar: dense per-day weights + prefix-sum array.

    Day ``i`` is ``epoch + i days``; its weight is ``pattern[i % len(pattern)]``
    unless a holiday overrides it.  A weight of 0 marks a non-working day and
    0.5 a half day.  The horizon of pre-computed days grows on demand.
    """

    _DEFAULT_BUFFER: int = 365 * 3

    def __init__(
        self,
        pattern: Sequence[float],
        holidays: Optional[dict[date, float]] = None,
        epoch: date = date(2024, 1, 1),
        horizon: Optional[int] = None,
    ) -> None:
        if not pattern:
            raise CalendarError("Pattern must not be empty.")

        self._epoch: date = epoch
        self._pattern: list[float] = list(pattern)
        self._n: int = len(self._pattern)
        self._np_pattern: np.ndarray = np.array(self._pattern, dtype=float)

        pp = np.zeros(self._n + 1, dtype=float)
        for i, w in enumerate(self._pattern):
            if w < 0.0:
                raise CalendarError(f"Pattern weights must be non-negative; got {w}.")
            pp[i + 1] = pp[i] + w
        self._cycle_work: float = float(pp[self._n])

        holiday_idx = {self._index(day): float(w) for day, w in (holidays or {}).items()}
        max_hol = max(holiday_idx) if holiday_idx else -1
        if horizon is None:
            horizon = max(max_hol + 1, 0) + self._DEFAULT_BUFFER
        self._horizon: int = max(horizon, max_hol + 1)

        self._weights: np.ndarray = self._np_pattern[
            np.arange(self._horizon, dtype=np.int64) % self._n
        ].copy()

        for idx, w in holiday_idx.items():
            if w < 0.0:
                raise CalendarError(f"Holiday weight must be non-negative; got {w}.")
            self._weights[idx] = w

        self._build_prefix()

    # ── day indexing ─────────────────────────────────────────────────────

    def _index(self, day: date) -> int:
        idx = (day - self._epoch).days
        if idx < 0:
            raise CalendarError(
                f"Day {day.isoformat()} is before the calendar epoch {self._epoch.isoformat()}."
            )
        return idx

    def _day(self, idx: int) -> date:
        return self._epoch + timedelta(days=int(idx))

    def _ensure_day(self, idx: int) -> None:
        if idx >= self._horizon:
            self._extend_to(idx + 1 + self._DEFAULT_BUFFER)

    # ── prefix management ────────────────────────────────────────────────

    def _build_prefix(self) -> None:
        self._prefix = np.empty(self._horizon + 1, dtype=float)
        self._prefix[0] = 0.0
        np.cumsum(self._weights, out=self._prefix[1:])

    def _rebuild_prefix_from(self, idx: int) -> None:
        self._prefix[idx + 1:] = (
            self._prefix[idx] + np.cumsum(self._weights[idx:])
        )

    def _extend_to(self, new_horizon: int) -> None:
        old = self._horizon
        logger.debug("Extending calendar horizon from %d to %d days", old, new_horizon)
        new_days = np.arange(old, new_horizon, dtype=np.int64)
        self._weights = np.concatenate(
            [self._weights, self._np_pattern[new_days % self._n]]
        )
        self._horizon = new_horizon
        self._build_prefix()

    # ── holiday management ───────────────────────────────────────────────

    def add_holiday(self, day: date, weight: float = 0.0) -> None:
        if weight < 0.0:
            raise CalendarError(f"Holiday weight must be non-negative; got {weight}.")
        idx = self._index(day)
        self._ensure_day(idx)
        self._weights[idx] = float(weight)
        self._rebuild_prefix_from(idx)

    def remove_holiday(self, day: date) -> None:
        idx = self._index(day)
        if idx < self._horizon:
            self._weights[idx] = float(self._np_pattern[idx % self._n])
            self._rebuild_prefix_from(idx)

    # ── queries ──────────────────────────────────────────────────────────

    def weight(self, day: date) -> float:
        idx = self._index(day)
        self._ensure_day(idx)
        return float(self._weights[idx])

    def is_working_day(self, day: date) -> bool:
        return self.weight(day) > 0.0

    def working_days(self, first: date, last: date) -> list[date]:
        """Working days in ``[first, last]``, both ends inclusive."""
        i, j = self._index(first), self._index(last)
        if j < i:
            return []
        self._ensure_day(j)
        offsets = np.nonzero(self._weights[i:j + 1] > 0.0)[0]
        return [self._day(i + k) for k in offsets]

    def work_between(self, first: date, last: date) -> float:
        """Total work units in ``[first, last]``, both ends inclusive."""
        i, j = self._index(first), self._index(last)
        if j < i:
            return 0.0
        self._ensure_day(j)
        return float(self._prefix[j + 1] - self._prefix[i])

    def add_work(self, start: date, amount: float) -> date:
        """
        Day on which ``amount`` work units, counted from the start of
        ``start``, are used up.  One unit from a working Monday ends on that
        Monday; non-working days are skipped.
        """
        if amount <= 0.0:
            return start
        if self._cycle_work == 0.0:
            raise CalendarError(
                "All pattern weights are zero; work can never be consumed."
            )
        i = self._index(start)
        self._ensure_day(i)
        target = self._prefix[i] + amount
        while self._prefix[self._horizon] < target:
            extra = int(np.ceil(amount / self._cycle_work)) * self._n + self._DEFAULT_BUFFER
            self._extend_to(self._horizon + extra)
        fi = int(np.searchsorted(self._prefix, target, side="left"))
        fi = min(max(fi, 1), self._horizon)
        return self._day(fi - 1)

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def epoch(self) -> date:
        return self._epoch

    @property
    def cycle_work(self) -> float:
        return self._cycle_work

    @property
    def horizon(self) -> int:
        return self._horizon

    @property
    def holidays(self) -> dict[date, float]:
        pattern_w = self._np_pattern[
            np.arange(self._horizon, dtype=np.int64) % self._n
        ]
        diff_days = np.where(self._weights != pattern_w)[0]
        return {self._day(d): float(self._weights[d]) for d in diff_days}

    def __repr__(self) -> str:
        return (
            f"WorkCalendar(pattern={self._pattern}, "
            f"epoch={self._epoch.isoformat()}, "
            f"cycle_work={self._cycle_work}, "
            f"horizon={self._horizon}, "
            f"holidays={len(self.holidays)})"
        )
