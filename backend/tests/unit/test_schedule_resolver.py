# backend/tests/unit/test_schedule_resolver.py
"""
Unit tests for ScheduleResolver.

Covers the exception > recurring > legacy precedence, the booking horizon
checks, and weekday derivation from the calendar date.
"""

from datetime import date, timedelta

import pytest

from kalasetu.core.enums import DayReason
from kalasetu.domain.availability import (
    BookingPolicy,
    ExceptionSnapshot,
    LegacyDayHours,
    ProviderSnapshot,
    RangeConfig,
    RecurringDay,
    ScheduleSnapshot,
    TimeRange,
)
from kalasetu.services.schedule_resolver import (
    ScheduleResolver,
    ranges_from_configs,
    weekday_index,
)

pytestmark = pytest.mark.unit

TODAY = date(2026, 2, 10)
MONDAY = date(2026, 2, 16)
THURSDAY = date(2026, 2, 19)

POLICY = BookingPolicy(
    buffer_minutes=0, min_notice_hours=0, advance_booking_days=30, max_bookings_per_day=0
)


def _provider(**working_hours) -> ProviderSnapshot:
    return ProviderSnapshot(id="p1", public_id="meera-pottery", working_hours=working_hours)


def _day(day_of_week: int, *ranges, is_active: bool = True) -> RecurringDay:
    return RecurringDay(
        day_of_week=day_of_week,
        slots=tuple(RangeConfig(start, end, is_active) for start, end in ranges),
    )


def _schedule(recurring=(), exceptions=()) -> ScheduleSnapshot:
    return ScheduleSnapshot(provider_id="p1", recurring=tuple(recurring), exceptions=tuple(exceptions))


@pytest.fixture
def resolver() -> ScheduleResolver:
    return ScheduleResolver()


class TestWeekdayIndex:
    def test_sunday_is_zero(self):
        assert weekday_index(date(2026, 2, 15)) == 0

    def test_known_days(self):
        assert weekday_index(MONDAY) == 1
        assert weekday_index(THURSDAY) == 4
        assert weekday_index(date(2026, 2, 21)) == 6


class TestRangesFromConfigs:
    def test_drops_inactive_and_invalid(self):
        ranges = ranges_from_configs(
            [
                RangeConfig("14:00", "16:00"),
                RangeConfig("09:00", "12:00"),
                RangeConfig("12:00", "12:00"),  # empty
                RangeConfig("18:00", "17:00"),  # reversed
                RangeConfig("10:00", "11:00", is_active=False),
                RangeConfig("9am", "5pm"),
                RangeConfig(None, "10:00"),
            ]
        )
        assert ranges == [TimeRange(540, 720), TimeRange(840, 960)]


class TestHorizon:
    def test_past_date(self):
        assert ScheduleResolver.check_horizon(TODAY - timedelta(days=1), TODAY, 30) == DayReason.PAST_DATE

    def test_today_is_bookable(self):
        assert ScheduleResolver.check_horizon(TODAY, TODAY, 30) is None

    def test_last_day_of_horizon_is_bookable(self):
        assert ScheduleResolver.check_horizon(TODAY + timedelta(days=30), TODAY, 30) is None

    def test_beyond_horizon(self):
        assert (
            ScheduleResolver.check_horizon(TODAY + timedelta(days=31), TODAY, 30)
            == DayReason.TOO_FAR_AHEAD
        )

    def test_horizon_wins_over_day_off(self, resolver):
        far = TODAY + timedelta(days=45)
        schedule = _schedule(exceptions=[ExceptionSnapshot(far, is_available=False, reason="Diwali")])
        resolved = resolver.resolve(_provider(), schedule, far, TODAY, POLICY)
        assert resolved.reason == DayReason.TOO_FAR_AHEAD


class TestPrecedence:
    def test_day_off_exception_overrides_everything(self, resolver):
        schedule = _schedule(
            recurring=[_day(1, ("09:00", "17:00"))],
            exceptions=[ExceptionSnapshot(MONDAY, is_available=False, reason="Family function")],
        )
        provider = _provider(monday=LegacyDayHours("09:00", "17:00", active=True))

        resolved = resolver.resolve(provider, schedule, MONDAY, TODAY, POLICY)

        assert not resolved.is_open
        assert resolved.reason == DayReason.DAY_OFF
        assert resolved.note == "Family function"

    def test_day_off_without_reason_has_empty_note(self, resolver):
        schedule = _schedule(exceptions=[ExceptionSnapshot(MONDAY, is_available=False)])
        resolved = resolver.resolve(_provider(), schedule, MONDAY, TODAY, POLICY)
        assert resolved.reason == DayReason.DAY_OFF
        assert resolved.note == ""

    def test_available_exception_replaces_recurring_ranges(self, resolver):
        schedule = _schedule(
            recurring=[_day(1, ("09:00", "17:00"))],
            exceptions=[
                ExceptionSnapshot(MONDAY, is_available=True, slots=(RangeConfig("10:00", "12:00"),))
            ],
        )
        resolved = resolver.resolve(_provider(), schedule, MONDAY, TODAY, POLICY)
        assert resolved.ranges == (TimeRange(600, 720),)

    def test_exception_with_only_inactive_ranges_falls_through_to_recurring(self, resolver):
        schedule = _schedule(
            recurring=[_day(1, ("09:00", "11:00"))],
            exceptions=[
                ExceptionSnapshot(
                    MONDAY,
                    is_available=True,
                    slots=(RangeConfig("13:00", "15:00", is_active=False), RangeConfig("16:00", "15:00")),
                )
            ],
        )
        resolved = resolver.resolve(_provider(), schedule, MONDAY, TODAY, POLICY)
        assert resolved.ranges == (TimeRange(540, 660),)

    def test_exception_for_other_date_is_ignored(self, resolver):
        schedule = _schedule(
            recurring=[_day(1, ("09:00", "11:00"))],
            exceptions=[ExceptionSnapshot(MONDAY + timedelta(days=7), is_available=False)],
        )
        resolved = resolver.resolve(_provider(), schedule, MONDAY, TODAY, POLICY)
        assert resolved.ranges == (TimeRange(540, 660),)

    def test_recurring_overrides_legacy_hours(self, resolver):
        schedule = _schedule(recurring=[_day(1, ("14:00", "16:00"))])
        provider = _provider(monday=LegacyDayHours("09:00", "17:00", active=True))
        resolved = resolver.resolve(provider, schedule, MONDAY, TODAY, POLICY)
        assert resolved.ranges == (TimeRange(840, 960),)

    def test_legacy_hours_used_without_schedule(self, resolver):
        provider = _provider(monday=LegacyDayHours("10:00", "13:00", active=True))
        resolved = resolver.resolve(provider, None, MONDAY, TODAY, POLICY)
        assert resolved.ranges == (TimeRange(600, 780),)

    def test_legacy_hours_used_when_recurring_has_no_entry_for_weekday(self, resolver):
        schedule = _schedule(recurring=[_day(2, ("09:00", "17:00"))])
        provider = _provider(monday=LegacyDayHours("10:00", "13:00", active=True))
        resolved = resolver.resolve(provider, schedule, MONDAY, TODAY, POLICY)
        assert resolved.ranges == (TimeRange(600, 780),)

    def test_inactive_legacy_day_is_closed(self, resolver):
        provider = _provider(monday=LegacyDayHours("10:00", "13:00", active=False))
        resolved = resolver.resolve(provider, None, MONDAY, TODAY, POLICY)
        assert resolved.reason == DayReason.CLOSED

    def test_invalid_legacy_hours_are_closed(self, resolver):
        provider = _provider(monday=LegacyDayHours("17:00", "09:00", active=True))
        resolved = resolver.resolve(provider, None, MONDAY, TODAY, POLICY)
        assert resolved.reason == DayReason.CLOSED

    def test_nothing_configured_is_closed(self, resolver):
        resolved = resolver.resolve(_provider(), _schedule(), MONDAY, TODAY, POLICY)
        assert not resolved.is_open
        assert resolved.reason == DayReason.CLOSED

    def test_thursday_entry_selected_for_thursday(self, resolver):
        schedule = _schedule(
            recurring=[
                _day(3, ("14:00", "16:00")),
                _day(4, ("10:00", "12:00")),
                _day(5, ("16:00", "18:00")),
            ]
        )
        resolved = resolver.resolve(_provider(), schedule, THURSDAY, TODAY, POLICY)
        assert resolved.ranges == (TimeRange(600, 720),)


class TestCustomStrategies:
    def test_first_non_empty_strategy_wins(self):
        calls = []

        def empty(provider, schedule, target_date):
            calls.append("empty")
            return []

        def fixed(provider, schedule, target_date):
            calls.append("fixed")
            return [TimeRange(480, 540)]

        def never(provider, schedule, target_date):
            calls.append("never")
            return [TimeRange(0, 60)]

        resolver = ScheduleResolver(strategies=[empty, fixed, never])
        resolved = resolver.resolve(_provider(), None, MONDAY, TODAY, POLICY)

        assert resolved.ranges == (TimeRange(480, 540),)
        assert calls == ["empty", "fixed"]
