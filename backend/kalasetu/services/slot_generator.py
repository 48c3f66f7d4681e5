# backend/kalasetu/services/slot_generator.py
"""
Slot Generator

Cuts open ranges into fixed-length slot start times.

Each range is processed on its own with an effective step of
``duration + buffer`` minutes: a start ``t`` is emitted while
``t + step <= range end``, so a range ``[s, e)`` yields exactly
``floor((e - s) / step)`` slots. Partial slots are never emitted and adjacent
ranges are never merged. The buffer trails each slot; it is never inserted
before a range's first slot.
"""

from typing import Iterable, List

from ..core.constants import MAX_BUFFER_MINUTES
from ..domain.availability import TimeRange


class SlotGenerator:
    def __init__(self, slot_duration_minutes: int):
        if slot_duration_minutes <= 0:
            raise ValueError(f"slot duration must be positive: {slot_duration_minutes}")
        self.slot_duration_minutes = slot_duration_minutes

    def effective_step(self, buffer_minutes: int) -> int:
        if not 0 <= buffer_minutes <= MAX_BUFFER_MINUTES:
            raise ValueError(f"buffer minutes out of range: {buffer_minutes}")
        return self.slot_duration_minutes + buffer_minutes

    def starts_for_range(self, time_range: TimeRange, buffer_minutes: int) -> List[int]:
        step = self.effective_step(buffer_minutes)
        return list(range(time_range.start, time_range.end - step + 1, step))

    def generate(self, ranges: Iterable[TimeRange], buffer_minutes: int) -> List[int]:
        """
        Ordered slot start times (minutes since midnight) across all ranges.

        Overlapping configured ranges can yield the same start twice; it is
        kept once.
        """
        starts = set()
        for time_range in ranges:
            starts.update(self.starts_for_range(time_range, buffer_minutes))
        return sorted(starts)
