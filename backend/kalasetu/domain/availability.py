"""
Immutable value snapshots consumed by the availability engine.

Provider, schedule and reservation data are owned by other subsystems. The
repositories copy them into these frozen values once per request; the engine
never touches ORM objects and never mutates what it was handed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Mapping, Optional, Tuple

from ..core.constants import (
    MAX_ADVANCE_BOOKING_DAYS,
    MAX_BUFFER_MINUTES,
    MAX_NOTICE_HOURS,
    MIN_ADVANCE_BOOKING_DAYS,
)
from ..core.enums import DayReason, ReservationStatus, SlotReason
from ..utils.time_utils import minutes_to_time_str


@dataclass(frozen=True)
class TimeRange:
    """Half-open ``[start, end)`` range in minutes since regional midnight."""

    start: int
    end: int

    @property
    def is_valid(self) -> bool:
        return self.end > self.start


@dataclass(frozen=True)
class RangeConfig:
    """A configured range exactly as stored: raw ``HH:MM`` strings."""

    start_time: Optional[str]
    end_time: Optional[str]
    is_active: bool = True


@dataclass(frozen=True)
class LegacyDayHours:
    start: Optional[str] = None
    end: Optional[str] = None
    active: bool = False


@dataclass(frozen=True)
class ProviderSnapshot:
    id: str
    public_id: str
    working_hours: Mapping[str, LegacyDayHours] = field(default_factory=dict)
    minimum_booking_notice_hours: Optional[int] = None
    buffer_time_minutes: Optional[int] = None
    max_bookings_per_day: int = 0


@dataclass(frozen=True)
class RecurringDay:
    day_of_week: int  # 0 = Sunday
    slots: Tuple[RangeConfig, ...] = ()


@dataclass(frozen=True)
class ExceptionSnapshot:
    exception_date: date
    is_available: bool
    slots: Tuple[RangeConfig, ...] = ()
    reason: Optional[str] = None


@dataclass(frozen=True)
class ScheduleSnapshot:
    provider_id: str
    recurring: Tuple[RecurringDay, ...] = ()
    exceptions: Tuple[ExceptionSnapshot, ...] = ()
    buffer_time_minutes: Optional[int] = None
    advance_booking_days: Optional[int] = None
    min_notice_hours: Optional[int] = None

    def exception_for(self, target_date: date) -> Optional[ExceptionSnapshot]:
        for exception in self.exceptions:
            if exception.exception_date == target_date:
                return exception
        return None

    def recurring_for(self, day_of_week: int) -> Optional[RecurringDay]:
        for day in self.recurring:
            if day.day_of_week == day_of_week:
                return day
        return None


@dataclass(frozen=True)
class ReservationSnapshot:
    id: str
    start_at: datetime
    end_at: datetime
    status: ReservationStatus


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True)
class BookingPolicy:
    """Effective policy scalars for one provider."""

    buffer_minutes: int
    min_notice_hours: int
    advance_booking_days: int
    max_bookings_per_day: int

    @classmethod
    def for_provider(
        cls,
        provider: ProviderSnapshot,
        schedule: Optional[ScheduleSnapshot],
        default_advance_booking_days: int,
    ) -> "BookingPolicy":
        """
        Schedule-level values override the provider profile; unset values fall
        back to the profile, then to platform defaults.
        """
        buffer_minutes = None
        min_notice_hours = None
        advance_booking_days = None
        if schedule is not None:
            buffer_minutes = schedule.buffer_time_minutes
            min_notice_hours = schedule.min_notice_hours
            advance_booking_days = schedule.advance_booking_days

        if buffer_minutes is None:
            buffer_minutes = provider.buffer_time_minutes or 0
        if min_notice_hours is None:
            min_notice_hours = provider.minimum_booking_notice_hours or 0
        if advance_booking_days is None:
            advance_booking_days = default_advance_booking_days

        return cls(
            buffer_minutes=_clamp(int(buffer_minutes), 0, MAX_BUFFER_MINUTES),
            min_notice_hours=_clamp(int(min_notice_hours), 0, MAX_NOTICE_HOURS),
            advance_booking_days=_clamp(
                int(advance_booking_days), MIN_ADVANCE_BOOKING_DAYS, MAX_ADVANCE_BOOKING_DAYS
            ),
            max_bookings_per_day=max(0, int(provider.max_bookings_per_day or 0)),
        )


@dataclass(frozen=True)
class ResolvedDay:
    """Outcome of schedule resolution: open ranges, or none plus a reason."""

    ranges: Tuple[TimeRange, ...] = ()
    reason: Optional[DayReason] = None
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return bool(self.ranges)


@dataclass(frozen=True)
class SlotResult:
    start: int
    available: bool
    reason: Optional[SlotReason] = None

    @property
    def time(self) -> str:
        return minutes_to_time_str(self.start)
