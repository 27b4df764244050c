"""
tests/config/test_defaults.py

Covers:
  - Default shift windows and calendar pattern
  - from_mapping with nested overrides and string values
  - Rejection of unknown keys and unknown time zones
  - Shift windows validated on load
"""

from datetime import date, time, timezone
from zoneinfo import ZoneInfoNotFoundError

import pytest

from kitbook.config import DEFAULT_CONFIG, CalendarDefaults, SchedulerConfig, ShiftDefaults


class TestDefaults:

    def test_shift_windows(self):
        shifts = ShiftDefaults()
        assert (shifts.morning_start, shifts.morning_end) == (time(8), time(12))
        assert (shifts.afternoon_start, shifts.afternoon_end) == (time(12), time(18, 30))

    def test_calendar_is_mon_fri_from_a_monday(self):
        cal = CalendarDefaults()
        assert cal.pattern == (1.0, 1.0, 1.0, 1.0, 1.0, 0.0, 0.0)
        assert cal.epoch.weekday() == 0

    def test_default_timezone_is_utc(self):
        assert DEFAULT_CONFIG.timezone == "UTC"
        assert DEFAULT_CONFIG.tzinfo is timezone.utc

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.timezone = "Europe/Madrid"


class TestFromMapping:

    def test_empty_mapping_gives_defaults(self):
        assert SchedulerConfig.from_mapping({}) == SchedulerConfig()

    def test_shift_override_from_strings(self):
        config = SchedulerConfig.from_mapping(
            {"shifts": {"morning_start": "07:30", "afternoon_end": "19:00"}}
        )
        assert config.shifts.morning_start == time(7, 30)
        assert config.shifts.afternoon_end == time(19, 0)
        assert config.shifts.morning_end == time(12, 0)

    def test_calendar_override(self):
        config = SchedulerConfig.from_mapping(
            {"calendar": {"pattern": [1, 1, 1, 1, 1, 1, 0], "epoch": "2025-01-06", "buffer_days": 30}}
        )
        assert config.calendar.pattern == (1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 0.0)
        assert config.calendar.epoch == date(2025, 1, 6)
        assert config.calendar.buffer_days == 30

    def test_utc_lowercase(self):
        assert SchedulerConfig.from_mapping({"timezone": "utc"}).tzinfo is timezone.utc

    def test_unknown_top_level_key_raises(self):
        with pytest.raises(ValueError, match="timezon"):
            SchedulerConfig.from_mapping({"timezon": "UTC"})

    def test_unknown_shift_key_raises(self):
        with pytest.raises(ValueError, match="evening_start"):
            SchedulerConfig.from_mapping({"shifts": {"evening_start": "20:00"}})

    def test_unknown_zone_raises(self):
        with pytest.raises(ZoneInfoNotFoundError):
            SchedulerConfig.from_mapping({"timezone": "Mars/Olympus_Mons"})

    def test_overlapping_shifts_raise_on_load(self):
        with pytest.raises(ValueError, match="non-overlapping"):
            SchedulerConfig.from_mapping({"shifts": {"morning_end": "13:00"}})

    def test_inverted_shift_raises_on_load(self):
        with pytest.raises(ValueError, match="non-overlapping"):
            SchedulerConfig.from_mapping({"shifts": {"afternoon_end": "11:00"}})


class TestShiftDefaults:

    def test_gap_between_shifts_allowed(self):
        shifts = ShiftDefaults(morning_end=time(11), afternoon_start=time(13))
        assert shifts.morning_end < shifts.afternoon_start

    def test_empty_morning_raises(self):
        with pytest.raises(ValueError):
            ShiftDefaults(morning_start=time(12))
