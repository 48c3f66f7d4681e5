from __future__ import annotations

import re
from typing import Optional

from ..core.constants import MINUTES_PER_DAY

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_to_minutes(value: Optional[str]) -> Optional[int]:
    """
    Parse an ``HH:MM`` string into minutes since midnight.

    ``24:00`` is accepted as the end-of-day sentinel (1440). Anything that
    does not parse, or falls outside 00:00-24:00, returns None so callers can
    drop the range instead of failing.
    """
    if not value or not isinstance(value, str):
        return None
    match = _HHMM_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes >= 60:
        return None
    total = hours * 60 + minutes
    if total > MINUTES_PER_DAY:
        return None
    return total


def minutes_to_time_str(minutes: int) -> str:
    """
    Convert minutes since midnight to HH:MM.

    1440 is rendered as "24:00".
    """
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    if minutes == MINUTES_PER_DAY:
        return "24:00"
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
