# backend/kalasetu/services/schedule_resolver.py
"""
Schedule Resolver

Works out the open time ranges for one provider on one calendar date from
three layered schedule sources, highest precedence first:

1. a date exception (day off, or custom ranges)
2. the recurring weekly schedule
3. the legacy per-weekday working hours on the provider profile

Exactly one source is authoritative per date. Each source is a strategy
callable; the first one returning a non-empty list of ranges wins. A source
whose ranges are all inactive or invalid yields nothing and the next source
is consulted.
"""

from datetime import date, timedelta
import logging
from typing import Callable, Iterable, List, Optional, Sequence

from ..core.constants import DAY_NAMES
from ..core.enums import DayReason
from ..domain.availability import (
    BookingPolicy,
    ProviderSnapshot,
    RangeConfig,
    ResolvedDay,
    ScheduleSnapshot,
    TimeRange,
)
from ..utils.time_utils import parse_time_to_minutes

logger = logging.getLogger(__name__)

ResolverStrategy = Callable[[ProviderSnapshot, Optional[ScheduleSnapshot], date], List[TimeRange]]


def weekday_index(target_date: date) -> int:
    """
    Day of week for a calendar date, 0 = Sunday .. 6 = Saturday.

    Read from the date's own year/month/day, so the configured regional
    offset can never shift it onto a neighbouring day.
    """
    return target_date.isoweekday() % 7


def _parse_range(start: Optional[str], end: Optional[str]) -> Optional[TimeRange]:
    start_min = parse_time_to_minutes(start)
    end_min = parse_time_to_minutes(end)
    if start_min is None or end_min is None:
        return None
    time_range = TimeRange(start=start_min, end=end_min)
    if not time_range.is_valid:
        return None
    return time_range


def ranges_from_configs(configs: Iterable[RangeConfig]) -> List[TimeRange]:
    """Active, well-formed ranges ordered by start. Anything else is dropped."""
    ranges: List[TimeRange] = []
    for config in configs:
        if not config.is_active:
            continue
        time_range = _parse_range(config.start_time, config.end_time)
        if time_range is None:
            logger.debug(
                "Dropping invalid range %s-%s", config.start_time, config.end_time
            )
            continue
        ranges.append(time_range)
    return sorted(ranges, key=lambda r: (r.start, r.end))


def exception_ranges(
    provider: ProviderSnapshot, schedule: Optional[ScheduleSnapshot], target_date: date
) -> List[TimeRange]:
    if schedule is None:
        return []
    exception = schedule.exception_for(target_date)
    if exception is None or not exception.is_available:
        return []
    return ranges_from_configs(exception.slots)


def recurring_ranges(
    provider: ProviderSnapshot, schedule: Optional[ScheduleSnapshot], target_date: date
) -> List[TimeRange]:
    if schedule is None:
        return []
    day = schedule.recurring_for(weekday_index(target_date))
    if day is None:
        return []
    return ranges_from_configs(day.slots)


def legacy_ranges(
    provider: ProviderSnapshot, schedule: Optional[ScheduleSnapshot], target_date: date
) -> List[TimeRange]:
    hours = provider.working_hours.get(DAY_NAMES[weekday_index(target_date)])
    if hours is None or not hours.active:
        return []
    time_range = _parse_range(hours.start, hours.end)
    return [time_range] if time_range is not None else []


DEFAULT_STRATEGIES: Sequence[ResolverStrategy] = (
    exception_ranges,
    recurring_ranges,
    legacy_ranges,
)


class ScheduleResolver:
    """Resolves the authoritative open ranges for a (provider, date) pair."""

    def __init__(self, strategies: Sequence[ResolverStrategy] = DEFAULT_STRATEGIES):
        self.strategies = tuple(strategies)

    @staticmethod
    def check_horizon(target_date: date, today: date, advance_booking_days: int) -> Optional[DayReason]:
        """Reason the date is outside the bookable window, or None."""
        if target_date < today:
            return DayReason.PAST_DATE
        if target_date > today + timedelta(days=advance_booking_days):
            return DayReason.TOO_FAR_AHEAD
        return None

    def resolve(
        self,
        provider: ProviderSnapshot,
        schedule: Optional[ScheduleSnapshot],
        target_date: date,
        today: date,
        policy: BookingPolicy,
    ) -> ResolvedDay:
        horizon_reason = self.check_horizon(target_date, today, policy.advance_booking_days)
        if horizon_reason is not None:
            return ResolvedDay(reason=horizon_reason)

        exception = schedule.exception_for(target_date) if schedule is not None else None
        if exception is not None and not exception.is_available:
            return ResolvedDay(reason=DayReason.DAY_OFF, note=exception.reason or "")

        for strategy in self.strategies:
            ranges = strategy(provider, schedule, target_date)
            if ranges:
                return ResolvedDay(ranges=tuple(ranges))

        return ResolvedDay(reason=DayReason.CLOSED)
