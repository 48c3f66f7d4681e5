# backend/kalasetu/core/clock.py
"""
Regional clock for the Kalasetu platform.

All date/time interpretation happens against one fixed UTC offset. The clock
is injected into services instead of calling ``datetime.now()`` ad hoc, so
"now" and "today" are deterministic under test.
"""

from datetime import date, datetime, time, timedelta
from typing import Protocol

import pytz

from .config import settings


class Clock(Protocol):
    """Source of the current regional instant."""

    @property
    def tz(self) -> pytz.tzinfo.BaseTzInfo: ...

    def now(self) -> datetime: ...

    def today(self) -> date: ...


class RegionalClock:
    """Wall clock pinned to a fixed UTC offset."""

    def __init__(self, offset_minutes: int) -> None:
        self.offset_minutes = offset_minutes
        self._tz = pytz.FixedOffset(offset_minutes)

    @property
    def tz(self) -> pytz.tzinfo.BaseTzInfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)

    def today(self) -> date:
        return self.now().date()


class FixedClock(RegionalClock):
    """Clock frozen at a given instant. Naive instants are read as regional time."""

    def __init__(self, instant: datetime, offset_minutes: int) -> None:
        super().__init__(offset_minutes)
        if instant.tzinfo is None:
            instant = self._tz.localize(instant)
        self._instant = instant.astimezone(self._tz)

    def now(self) -> datetime:
        return self._instant


def regional_midnight(day: date, tz: pytz.tzinfo.BaseTzInfo) -> datetime:
    """Aware datetime for 00:00 of ``day`` in the regional offset."""
    return tz.localize(datetime.combine(day, time.min))


def regional_instant(day: date, minutes: int, tz: pytz.tzinfo.BaseTzInfo) -> datetime:
    """Aware datetime ``minutes`` after regional midnight of ``day``."""
    return regional_midnight(day, tz) + timedelta(minutes=minutes)


def minutes_since_regional_midnight(
    instant: datetime, day: date, tz: pytz.tzinfo.BaseTzInfo
) -> float:
    """
    Project an instant onto the minute axis of ``day``.

    Result may be negative (instant before the day) or above 1440 (after it).
    Seconds are kept as a fraction so overlap checks stay exact.
    Naive instants are assumed to be UTC, as stored by the reservation tables.
    """
    if instant.tzinfo is None:
        instant = pytz.UTC.localize(instant)
    delta = instant - regional_midnight(day, tz)
    return delta.total_seconds() / 60


def get_regional_clock() -> Clock:
    """FastAPI dependency returning the deploy-time regional clock."""
    return RegionalClock(settings.regional_utc_offset_minutes)
