from .availability import (
    BookingPolicy,
    ExceptionSnapshot,
    LegacyDayHours,
    ProviderSnapshot,
    RangeConfig,
    RecurringDay,
    ReservationSnapshot,
    ResolvedDay,
    ScheduleSnapshot,
    SlotResult,
    TimeRange,
)

__all__ = [
    "BookingPolicy",
    "ExceptionSnapshot",
    "LegacyDayHours",
    "ProviderSnapshot",
    "RangeConfig",
    "RecurringDay",
    "ReservationSnapshot",
    "ResolvedDay",
    "ScheduleSnapshot",
    "SlotResult",
    "TimeRange",
]
