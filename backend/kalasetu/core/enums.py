# backend/kalasetu/core/enums.py
"""
Core enums for the Kalasetu availability backend.

String enums so values serialize directly into API payloads and JSON columns.
"""

from enum import Enum


class ReservationStatus(str, Enum):
    """Reservation lifecycle statuses, owned by the booking workflow."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"

    @classmethod
    def blocking(cls) -> tuple["ReservationStatus", ...]:
        """Statuses that occupy time on a provider's calendar."""
        return (cls.PENDING, cls.CONFIRMED)


class DayReason(str, Enum):
    """Why a whole day produced no slots."""

    PAST_DATE = "past_date"
    TOO_FAR_AHEAD = "too_far_ahead"
    DAY_OFF = "day_off"
    CLOSED = "closed"
    NO_SLOTS = "no_slots"


class SlotReason(str, Enum):
    """
    Why a single generated slot is unavailable.

    Closed set: an unavailable slot always carries exactly one of these.
    """

    TOO_SOON = "too_soon"
    DAY_FULL = "day_full"
    BOOKED = "booked"
