# backend/kalasetu/services/conflict_detector.py
"""
Conflict Detector

Flags candidate slots that overlap an existing reservation.

A slot ``[t, t + duration)`` conflicts with a reservation ``[rs, re)`` iff
``t < re and t + duration > rs`` (half-open overlap, so back-to-back
bookings do not collide). Reservation instants are projected onto the
minute axis of the target date in the regional offset; a reservation that
started the previous evening projects to a negative start and still blocks
the early slots it covers.

Reservations are sorted by start once. For each slot, ``bisect`` finds the
reservations starting before the slot ends, and a prefix maximum of their
end times tells whether any of them is still running at the slot start.
"""

from bisect import bisect_left
from datetime import date
from typing import List, Sequence, Tuple

import pytz

from ..core.clock import minutes_since_regional_midnight
from ..domain.availability import ReservationSnapshot


class ConflictDetector:
    def __init__(
        self,
        reservations: Sequence[ReservationSnapshot],
        target_date: date,
        tz: pytz.tzinfo.BaseTzInfo,
        slot_duration_minutes: int,
    ):
        self.slot_duration_minutes = slot_duration_minutes
        self.reservation_count = len(reservations)

        intervals: List[Tuple[float, float]] = sorted(
            (
                minutes_since_regional_midnight(r.start_at, target_date, tz),
                minutes_since_regional_midnight(r.end_at, target_date, tz),
            )
            for r in reservations
        )
        self._starts = [start for start, _ in intervals]
        self._max_end_before: List[float] = []
        running_max = float("-inf")
        for _, end in intervals:
            running_max = max(running_max, end)
            self._max_end_before.append(running_max)

    def conflicts(self, slot_start: int) -> bool:
        slot_end = slot_start + self.slot_duration_minutes
        # Reservations at indexes < count start before the slot ends.
        count = bisect_left(self._starts, slot_end)
        if count == 0:
            return False
        return self._max_end_before[count - 1] > slot_start
