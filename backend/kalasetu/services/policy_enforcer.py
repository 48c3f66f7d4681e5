# backend/kalasetu/services/policy_enforcer.py
"""
Policy Enforcer

Decides, per generated slot, whether it can be offered. Rules are checked in
a fixed order and the first one that applies is the slot's only reason:

1. notice window  - slot starts before now + minimum notice  -> too_soon
2. daily cap      - day already holds max_bookings_per_day   -> day_full
3. conflict       - overlaps a pending/confirmed reservation -> booked

The daily cap marks every slot of the day once reached, including slots
that do not overlap any reservation.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List

import pytz

from ..core.clock import regional_instant
from ..core.enums import SlotReason
from ..domain.availability import BookingPolicy, SlotResult
from .conflict_detector import ConflictDetector


class PolicyEnforcer:
    def __init__(
        self,
        policy: BookingPolicy,
        conflict_detector: ConflictDetector,
        target_date: date,
        now: datetime,
        tz: pytz.tzinfo.BaseTzInfo,
    ):
        self.policy = policy
        self.conflict_detector = conflict_detector
        self.target_date = target_date
        self.tz = tz
        self.notice_cutoff = now + timedelta(hours=policy.min_notice_hours)
        self.day_full = (
            policy.max_bookings_per_day > 0
            and conflict_detector.reservation_count >= policy.max_bookings_per_day
        )

    def evaluate(self, slot_start: int) -> SlotResult:
        if regional_instant(self.target_date, slot_start, self.tz) < self.notice_cutoff:
            return SlotResult(start=slot_start, available=False, reason=SlotReason.TOO_SOON)
        if self.day_full:
            return SlotResult(start=slot_start, available=False, reason=SlotReason.DAY_FULL)
        if self.conflict_detector.conflicts(slot_start):
            return SlotResult(start=slot_start, available=False, reason=SlotReason.BOOKED)
        return SlotResult(start=slot_start, available=True)

    def evaluate_all(self, slot_starts: Iterable[int]) -> List[SlotResult]:
        return [self.evaluate(start) for start in slot_starts]
