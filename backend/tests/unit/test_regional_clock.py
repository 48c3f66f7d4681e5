from datetime import date, datetime

import pytest
import pytz

from kalasetu.core.clock import (
    FixedClock,
    RegionalClock,
    minutes_since_regional_midnight,
    regional_instant,
    regional_midnight,
)

pytestmark = pytest.mark.unit

IST = pytz.FixedOffset(330)


class TestFixedClock:
    def test_naive_instant_is_regional_wall_time(self):
        clock = FixedClock(datetime(2026, 2, 10, 10, 0), 330)

        assert clock.now().hour == 10
        assert clock.now().utcoffset().total_seconds() == 330 * 60
        assert clock.today() == date(2026, 2, 10)

    def test_aware_instant_is_converted_to_regional_date(self):
        # 20:00 UTC on the 18th is already 01:30 on the 19th in IST.
        clock = FixedClock(pytz.UTC.localize(datetime(2026, 2, 18, 20, 0)), 330)

        assert clock.today() == date(2026, 2, 19)
        assert clock.now().hour == 1
        assert clock.now().minute == 30

    def test_negative_offset(self):
        clock = FixedClock(pytz.UTC.localize(datetime(2026, 2, 19, 3, 0)), -300)
        assert clock.today() == date(2026, 2, 18)


class TestRegionalClock:
    def test_now_carries_configured_offset(self):
        clock = RegionalClock(330)
        assert clock.now().utcoffset().total_seconds() == 330 * 60
        assert clock.tz.utcoffset(None).total_seconds() == 330 * 60


class TestMinuteAxis:
    def test_regional_midnight_and_instant(self):
        midnight = regional_midnight(date(2026, 2, 16), IST)
        assert midnight == pytz.UTC.localize(datetime(2026, 2, 15, 18, 30))
        assert regional_instant(date(2026, 2, 16), 540, IST) == IST.localize(
            datetime(2026, 2, 16, 9, 0)
        )

    def test_projection_of_aware_instant(self):
        instant = IST.localize(datetime(2026, 2, 16, 11, 0))
        assert minutes_since_regional_midnight(instant, date(2026, 2, 16), IST) == 660

    def test_naive_instant_is_read_as_utc(self):
        # 05:30 UTC == 11:00 IST
        instant = datetime(2026, 2, 16, 5, 30)
        assert minutes_since_regional_midnight(instant, date(2026, 2, 16), IST) == 660

    def test_previous_day_projects_negative(self):
        instant = IST.localize(datetime(2026, 2, 15, 23, 0))
        assert minutes_since_regional_midnight(instant, date(2026, 2, 16), IST) == -60

    def test_seconds_are_kept(self):
        instant = IST.localize(datetime(2026, 2, 16, 10, 0, 30))
        assert minutes_since_regional_midnight(instant, date(2026, 2, 16), IST) == 600.5
