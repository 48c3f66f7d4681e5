# backend/kalasetu/repositories/schedule_repository.py
"""
Schedule Repository

Loads a provider's recurring schedule and date exceptions in one read and
returns them as a ScheduleSnapshot. Malformed JSON entries are skipped here;
ranges that parse but are invalid (end <= start) are left for the resolver
to drop.
"""

from datetime import date
import logging
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from ..domain.availability import (
    ExceptionSnapshot,
    RangeConfig,
    RecurringDay,
    ScheduleSnapshot,
)
from ..models.schedule import ProviderSchedule, ScheduleException
from .base_repository import BaseRepository
from .provider_repository import _optional_int

logger = logging.getLogger(__name__)


def _range_configs(raw: Any) -> Tuple[RangeConfig, ...]:
    if not isinstance(raw, list):
        return ()
    configs: List[RangeConfig] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        configs.append(
            RangeConfig(
                start_time=entry.get("start_time"),
                end_time=entry.get("end_time"),
                # A missing flag means active.
                is_active=entry.get("is_active") is not False,
            )
        )
    return tuple(configs)


def _recurring_days(raw: Any) -> Tuple[RecurringDay, ...]:
    if not isinstance(raw, list):
        return ()
    days: List[RecurringDay] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        day_of_week = entry.get("day_of_week")
        if isinstance(day_of_week, bool) or not isinstance(day_of_week, int):
            continue
        if not 0 <= day_of_week <= 6:
            logger.debug("Skipping recurring entry with day_of_week=%s", day_of_week)
            continue
        days.append(RecurringDay(day_of_week=day_of_week, slots=_range_configs(entry.get("slots"))))
    return tuple(days)


def _exceptions(rows: Iterable[ScheduleException]) -> Tuple[ExceptionSnapshot, ...]:
    snapshots: List[ExceptionSnapshot] = []
    for row in rows:
        if not isinstance(row.exception_date, date):
            continue
        snapshots.append(
            ExceptionSnapshot(
                exception_date=row.exception_date,
                is_available=bool(row.is_available),
                slots=_range_configs(row.slots),
                reason=row.reason,
            )
        )
    return tuple(snapshots)


class ScheduleRepository(BaseRepository[ProviderSchedule]):
    """Read access to provider schedules."""

    def __init__(self, db: Session):
        super().__init__(db, ProviderSchedule)

    def get_for_provider(self, provider_id: str) -> Optional[ProviderSchedule]:
        query = (
            self._build_query()
            .options(selectinload(ProviderSchedule.exceptions))
            .filter(ProviderSchedule.provider_id == provider_id)
        )
        rows = self._execute_query(query)
        return rows[0] if rows else None

    def get_snapshot_for_provider(self, provider_id: str) -> Optional[ScheduleSnapshot]:
        schedule = self.get_for_provider(provider_id)
        if schedule is None:
            return None
        return self.to_snapshot(schedule)

    @staticmethod
    def to_snapshot(schedule: ProviderSchedule) -> ScheduleSnapshot:
        return ScheduleSnapshot(
            provider_id=schedule.provider_id,
            recurring=_recurring_days(schedule.recurring_schedule),
            exceptions=_exceptions(schedule.exceptions),
            buffer_time_minutes=_optional_int(schedule.buffer_time_minutes),
            advance_booking_days=_optional_int(schedule.advance_booking_days),
            min_notice_hours=_optional_int(schedule.min_notice_hours),
        )
