"""
tests/calendar/test_calendar.py

Covers:
  - Working-day listing and counting (no holidays)
  - Weekend/non-working day skipping in add_work
  - Fractional pattern weights (half days)
  - Holiday overrides (constructor, add, remove, half-day)
  - Horizon auto-extension
  - Edge cases (empty / negative / all-zero patterns, days before the epoch)
"""

from datetime import date, timedelta

import pytest

from kitbook.calendar import CalendarError, WorkCalendar

EPOCH = date(2024, 1, 1)  # Monday


def d(i):
    return EPOCH + timedelta(days=i)


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def work_week():
    """Standard Mon–Fri calendar, cycle length 7."""
    return WorkCalendar([1, 1, 1, 1, 1, 0, 0], epoch=EPOCH)


@pytest.fixture
def uniform():
    """Every day is a full working day."""
    return WorkCalendar([1.0], epoch=EPOCH)


@pytest.fixture
def half_days():
    """Every day delivers only half a work unit."""
    return WorkCalendar([0.5], epoch=EPOCH)


# ── Working days ──────────────────────────────────────────────────────────────

class TestWorkingDays:

    def test_full_week(self, work_week):
        assert work_week.working_days(d(0), d(6)) == [d(0), d(1), d(2), d(3), d(4)]

    def test_single_day(self, work_week):
        assert work_week.working_days(d(2), d(2)) == [d(2)]

    def test_weekend_only(self, work_week):
        assert work_week.working_days(d(5), d(6)) == []

    def test_crosses_weekend(self, work_week):
        assert work_week.working_days(d(4), d(7)) == [d(4), d(7)]

    def test_reversed_range_is_empty(self, work_week):
        assert work_week.working_days(d(3), d(1)) == []

    def test_is_working_day(self, work_week):
        assert work_week.is_working_day(d(0))
        assert not work_week.is_working_day(d(5))
        assert not work_week.is_working_day(d(6))

    def test_work_between(self, work_week):
        assert work_week.work_between(d(0), d(6)) == 5.0
        assert work_week.work_between(d(0), d(13)) == 10.0

    def test_work_between_reversed_is_zero(self, work_week):
        assert work_week.work_between(d(4), d(0)) == 0.0

    def test_epoch_alignment_with_real_dates(self):
        cal = WorkCalendar([1, 1, 1, 1, 1, 0, 0])
        # 2025-03-03 is a Monday, 2025-03-08 a Saturday
        assert cal.is_working_day(date(2025, 3, 3))
        assert not cal.is_working_day(date(2025, 3, 8))


# ── add_work ──────────────────────────────────────────────────────────────────

class TestAddWork:

    def test_zero_amount_returns_start(self, work_week):
        assert work_week.add_work(d(3), 0.0) == d(3)

    def test_negative_amount_returns_start(self, work_week):
        assert work_week.add_work(d(3), -1.0) == d(3)

    def test_one_day_ends_same_day(self, work_week):
        assert work_week.add_work(d(0), 1.0) == d(0)

    def test_five_days_fills_week(self, work_week):
        assert work_week.add_work(d(0), 5.0) == d(4)

    def test_six_days_crosses_weekend(self, work_week):
        assert work_week.add_work(d(0), 6.0) == d(7)

    def test_friday_plus_two(self, work_week):
        assert work_week.add_work(d(4), 2.0) == d(7)

    def test_start_on_weekend_skips_to_monday(self, work_week):
        assert work_week.add_work(d(5), 1.0) == d(7)

    def test_large_amount_many_cycles(self, work_week):
        # 250 working days = 50 weeks; last one is Friday of week 50 = day 347
        assert work_week.add_work(d(0), 250.0) == d(347)

    def test_uniform_calendar(self, uniform):
        assert uniform.add_work(d(0), 3.0) == d(2)

    def test_half_day_calendar_doubles_elapsed(self, half_days):
        assert half_days.add_work(d(0), 1.0) == d(1)
        assert half_days.add_work(d(0), 0.5) == d(0)

    def test_fractional_amount_ends_inside_day(self, work_week):
        assert work_week.add_work(d(0), 1.5) == d(1)


# ── Holidays ──────────────────────────────────────────────────────────────────

class TestHolidays:

    def test_constructor_holidays(self):
        cal = WorkCalendar([1, 1, 1, 1, 1, 0, 0], holidays={d(0): 0.0}, epoch=EPOCH)
        assert cal.working_days(d(0), d(4)) == [d(1), d(2), d(3), d(4)]

    def test_add_holiday_removes_working_day(self, work_week):
        work_week.add_holiday(d(0))
        assert not work_week.is_working_day(d(0))
        assert work_week.add_work(d(0), 1.0) == d(1)

    def test_holiday_shifts_later_results(self, work_week):
        work_week.add_holiday(d(2))
        assert work_week.add_work(d(0), 5.0) == d(7)

    def test_remove_holiday_restores(self, work_week):
        work_week.add_holiday(d(0))
        work_week.remove_holiday(d(0))
        assert work_week.is_working_day(d(0))
        assert work_week.holidays == {}

    def test_half_day_holiday(self, work_week):
        work_week.add_holiday(d(1), 0.5)
        assert work_week.work_between(d(0), d(4)) == pytest.approx(4.5)
        assert work_week.is_working_day(d(1))

    def test_working_weekend_override(self, work_week):
        work_week.add_holiday(d(5), 1.0)
        assert work_week.working_days(d(4), d(7)) == [d(4), d(5), d(7)]

    def test_holidays_property(self, work_week):
        work_week.add_holiday(d(0))
        work_week.add_holiday(d(3), 0.5)
        assert work_week.holidays == {d(0): 0.0, d(3): 0.5}

    def test_negative_holiday_weight_raises(self, work_week):
        with pytest.raises(CalendarError):
            work_week.add_holiday(d(0), -1.0)

    def test_holiday_before_epoch_raises(self, work_week):
        with pytest.raises(CalendarError):
            work_week.add_holiday(d(-1))


# ── Horizon ───────────────────────────────────────────────────────────────────

class TestHorizon:

    def test_holiday_beyond_horizon_extends(self):
        cal = WorkCalendar([1.0], epoch=EPOCH, horizon=10)
        cal.add_holiday(d(50))
        assert cal.horizon > 50
        assert cal.holidays == {d(50): 0.0}

    def test_add_work_beyond_horizon_extends(self):
        cal = WorkCalendar([1, 1, 1, 1, 1, 0, 0], epoch=EPOCH, horizon=10)
        # 100 working days = 20 weeks; last one is Friday of week 20 = day 137
        assert cal.add_work(d(0), 100.0) == d(137)
        assert cal.horizon > 137

    def test_query_beyond_horizon_extends(self):
        cal = WorkCalendar([1, 1, 1, 1, 1, 0, 0], epoch=EPOCH, horizon=7)
        assert cal.working_days(d(14), d(20)) == [d(14), d(15), d(16), d(17), d(18)]

    def test_constructor_holiday_sets_horizon(self):
        cal = WorkCalendar([1.0], holidays={d(20): 0.0}, epoch=EPOCH, horizon=5)
        assert cal.horizon >= 21


# ── Edge cases ────────────────────────────────────────────────────────────────

class TestEdgeCases:

    def test_empty_pattern_raises(self):
        with pytest.raises(CalendarError):
            WorkCalendar([])

    def test_negative_pattern_weight_raises(self):
        with pytest.raises(CalendarError):
            WorkCalendar([1, -1])

    def test_all_zero_pattern_add_work_raises(self):
        cal = WorkCalendar([0, 0], epoch=EPOCH)
        with pytest.raises(CalendarError):
            cal.add_work(d(0), 1.0)

    def test_all_zero_pattern_has_no_working_days(self):
        cal = WorkCalendar([0], epoch=EPOCH)
        assert cal.working_days(d(0), d(30)) == []

    def test_day_before_epoch_raises(self, work_week):
        with pytest.raises(CalendarError):
            work_week.working_days(d(-3), d(3))

    def test_cycle_work(self, work_week):
        assert work_week.cycle_work == 5.0

    def test_repr(self, work_week):
        r = repr(work_week)
        assert r.startswith("WorkCalendar(")
        assert "epoch=2024-01-01" in r
