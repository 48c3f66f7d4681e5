# backend/kalasetu/services/availability_service.py
"""
Availability Query Service for the Kalasetu platform.

Answers "which slots can a customer book with this artisan on this date?".
One call is a pure read over a snapshot taken at the start of the request:
provider and schedule are loaded once, reservations for the day are loaded
once, and nothing is written or cached between requests.

Pipeline: ScheduleResolver -> SlotGenerator -> ConflictDetector ->
PolicyEnforcer. A day with no bookable slots is a normal outcome reported
through ``meta.reason``; only a malformed date or an unknown artisan raise.
"""

from datetime import date, timedelta
import logging
import re
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.clock import Clock, regional_midnight
from ..core.config import settings
from ..core.enums import DayReason
from ..core.exceptions import NotFoundException, ValidationException
from ..domain.availability import BookingPolicy, ResolvedDay, SlotResult
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..repositories.factory import RepositoryFactory
from ..repositories.provider_repository import ProviderRepository
from ..repositories.reservation_repository import ReservationRepository
from ..repositories.schedule_repository import ScheduleRepository
from ..schemas.availability import (
    AvailabilityMeta,
    AvailabilitySlot,
    DayAvailabilityResponse,
)
from .base import BaseService
from .conflict_detector import ConflictDetector
from .policy_enforcer import PolicyEnforcer
from .schedule_resolver import ScheduleResolver
from .slot_generator import SlotGenerator

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DATE_FORMAT_MESSAGE = 'Query parameter "date" is required in YYYY-MM-DD format'


def parse_request_date(value: Optional[str]) -> date:
    """
    Parse the ``date`` query parameter.

    Raises:
        ValidationException: missing, not ``YYYY-MM-DD``, or not a real
            calendar date (e.g. 2026-02-30)
    """
    if not value or not _DATE_RE.match(value):
        raise ValidationException(DATE_FORMAT_MESSAGE, details={"date": value})
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationException("Invalid date", details={"date": value})


class AvailabilityService(BaseService):
    """
    Computes per-day slot availability for a single artisan.

    Repositories default to the factory-built ones for ``db``; tests may pass
    their own. The clock is always injected so "now" is deterministic.
    """

    def __init__(
        self,
        db: Session,
        clock: Clock,
        provider_repository: Optional[ProviderRepository] = None,
        schedule_repository: Optional[ScheduleRepository] = None,
        reservation_repository: Optional[ReservationRepository] = None,
        resolver: Optional[ScheduleResolver] = None,
        slot_duration_minutes: Optional[int] = None,
        default_advance_booking_days: Optional[int] = None,
    ):
        super().__init__(db)
        self.clock = clock
        self.provider_repository = (
            provider_repository or RepositoryFactory.create_provider_repository(db)
        )
        self.schedule_repository = (
            schedule_repository or RepositoryFactory.create_schedule_repository(db)
        )
        self.reservation_repository = (
            reservation_repository or RepositoryFactory.create_reservation_repository(db)
        )
        self.resolver = resolver or ScheduleResolver()
        self.slot_duration_minutes = slot_duration_minutes or settings.slot_duration_minutes
        self.default_advance_booking_days = (
            default_advance_booking_days or settings.default_advance_booking_days
        )
        self.slot_generator = SlotGenerator(self.slot_duration_minutes)

    @BaseService.measure_operation("get_day_availability")
    def get_day_availability(self, public_id: str, date_str: Optional[str]) -> DayAvailabilityResponse:
        """
        Bookable slots for one artisan on one regional calendar date.

        Args:
            public_id: Artisan's public identifier
            date_str: Requested date, ``YYYY-MM-DD``

        Returns:
            DayAvailabilityResponse; ``slots`` is empty when ``meta.reason``
            is set

        Raises:
            ValidationException: malformed date
            NotFoundException: no artisan with ``public_id``
        """
        target_date = parse_request_date(date_str)
        today = self.clock.today()

        # Past dates never need storage.
        if target_date < today:
            return self._empty_day(target_date, ResolvedDay(reason=DayReason.PAST_DATE))

        provider = self.provider_repository.get_snapshot_by_public_id(public_id)
        if provider is None:
            raise NotFoundException("Artisan not found", details={"public_id": public_id})

        schedule = self.schedule_repository.get_snapshot_for_provider(provider.id)
        policy = BookingPolicy.for_provider(provider, schedule, self.default_advance_booking_days)

        resolved = self.resolver.resolve(provider, schedule, target_date, today, policy)
        if not resolved.is_open:
            return self._empty_day(target_date, resolved, policy)

        slot_starts = self.slot_generator.generate(resolved.ranges, policy.buffer_minutes)
        if not slot_starts:
            return self._empty_day(target_date, ResolvedDay(reason=DayReason.NO_SLOTS))

        tz = self.clock.tz
        day_start = regional_midnight(target_date, tz)
        day_end = regional_midnight(target_date + timedelta(days=1), tz)
        reservations = self.reservation_repository.get_active_in_window(
            provider.id, day_start, day_end
        )

        detector = ConflictDetector(reservations, target_date, tz, self.slot_duration_minutes)
        enforcer = PolicyEnforcer(policy, detector, target_date, self.clock.now(), tz)
        results = enforcer.evaluate_all(slot_starts)

        self.logger.debug(
            "Availability for %s on %s: %d slots, %d reservations",
            public_id,
            target_date.isoformat(),
            len(results),
            len(reservations),
        )
        prometheus_metrics.record_availability_outcome("open")
        return DayAvailabilityResponse(
            date=target_date.isoformat(),
            slots=self._to_slot_responses(results),
            meta=AvailabilityMeta(
                slot_duration_minutes=self.slot_duration_minutes,
                buffer_minutes=policy.buffer_minutes,
                min_notice_hours=policy.min_notice_hours,
                advance_booking_days=policy.advance_booking_days,
            ),
        )

    @staticmethod
    def _to_slot_responses(results: List[SlotResult]) -> List[AvailabilitySlot]:
        return [
            AvailabilitySlot(
                time=result.time,
                available=result.available,
                reason=result.reason.value if result.reason is not None else None,
            )
            for result in results
        ]

    def _empty_day(
        self,
        target_date: date,
        resolved: ResolvedDay,
        policy: Optional[BookingPolicy] = None,
    ) -> DayAvailabilityResponse:
        reason = resolved.reason or DayReason.CLOSED
        meta = AvailabilityMeta(reason=reason.value)
        if reason == DayReason.TOO_FAR_AHEAD and policy is not None:
            meta.advance_booking_days = policy.advance_booking_days
        elif reason == DayReason.DAY_OFF:
            meta.note = resolved.note or ""

        prometheus_metrics.record_availability_outcome(reason.value)
        return DayAvailabilityResponse(date=target_date.isoformat(), slots=[], meta=meta)
