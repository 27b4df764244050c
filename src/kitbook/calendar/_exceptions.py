from kitbook.errors import SchedulerError


class CalendarError(SchedulerError):
    """Raised for malformed calendar patterns, holidays or day lookups."""
