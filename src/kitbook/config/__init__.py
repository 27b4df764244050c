from kitbook.config.defaults import (
    DEFAULT_CONFIG,
    CalendarDefaults,
    SchedulerConfig,
    ShiftDefaults,
)

__all__ = [
    "DEFAULT_CONFIG",
    "CalendarDefaults",
    "SchedulerConfig",
    "ShiftDefaults",
]
