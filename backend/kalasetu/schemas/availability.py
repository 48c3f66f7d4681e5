# backend/kalasetu/schemas/availability.py
"""
Public availability schemas for the customer-facing API.

These schemas are designed for unauthenticated access. Field names on the
wire are camelCase to match the customer app; Python attributes stay
snake_case.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AvailabilitySlot(BaseModel):
    """One candidate slot. ``reason`` is present only when unavailable."""

    time: str = Field(description="Slot start time in HH:MM format (regional time)")
    available: bool
    reason: Optional[str] = Field(
        None, description="Why the slot cannot be booked: too_soon, day_full or booked"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"time": "11:00", "available": False, "reason": "booked"}}
    )


class AvailabilityMeta(BaseModel):
    """
    Response metadata.

    On a day with slots the policy fields are populated. On an empty day
    ``reason`` says why, with ``advanceBookingDays`` for too_far_ahead and
    ``note`` for day_off.
    """

    reason: Optional[str] = Field(
        None,
        description="past_date, too_far_ahead, day_off, closed or no_slots when the day is empty",
    )
    note: Optional[str] = Field(None, description="Provider's note for a day off")
    slot_duration_minutes: Optional[int] = Field(None, alias="slotDurationMinutes")
    buffer_minutes: Optional[int] = Field(None, alias="bufferMinutes")
    min_notice_hours: Optional[int] = Field(None, alias="minNoticeHours")
    advance_booking_days: Optional[int] = Field(None, alias="advanceBookingDays")

    model_config = ConfigDict(populate_by_name=True)


class DayAvailabilityResponse(BaseModel):
    """Bookable slots for one provider on one date."""

    date: str = Field(description="Date in YYYY-MM-DD format")
    slots: List[AvailabilitySlot] = Field(default_factory=list)
    meta: AvailabilityMeta

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "date": "2026-02-16",
                    "slots": [
                        {"time": "09:00", "available": True},
                        {"time": "10:00", "available": False, "reason": "booked"},
                    ],
                    "meta": {
                        "slotDurationMinutes": 60,
                        "bufferMinutes": 0,
                        "minNoticeHours": 24,
                        "advanceBookingDays": 30,
                    },
                },
                {"date": "2026-02-17", "slots": [], "meta": {"reason": "day_off", "note": "Holiday"}},
            ]
        },
    )
