# backend/kalasetu/models/schedule.py
"""
Provider schedule records: recurring weekly hours plus date exceptions.

A provider has at most one schedule. When present it supersedes the legacy
``Provider.working_hours``; an exception for a date supersedes both.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class ProviderSchedule(Base):
    """
    Recurring schedule and booking policy overrides.

    ``recurring_schedule`` holds one entry per configured weekday
    (0 = Sunday .. 6 = Saturday)::

        [{"day_of_week": 1,
          "slots": [{"start_time": "09:00", "end_time": "12:00", "is_active": true}]}]

    Policy columns are nullable; NULL means "use the provider profile value".
    """

    __tablename__ = "provider_schedules"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    provider_id = Column(String(26), ForeignKey("providers.id"), nullable=False, unique=True)

    recurring_schedule = Column(JSON, nullable=False, default=list)
    buffer_time_minutes = Column(Integer, nullable=True)
    advance_booking_days = Column(Integer, nullable=True)
    min_notice_hours = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    provider = relationship("Provider", back_populates="schedule")
    exceptions = relationship(
        "ScheduleException",
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="ScheduleException.exception_date",
    )


class ScheduleException(Base):
    """A one-off override for a single calendar date."""

    __tablename__ = "schedule_exceptions"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    schedule_id = Column(String(26), ForeignKey("provider_schedules.id"), nullable=False)
    exception_date = Column(Date, nullable=False, index=True)
    is_available = Column(Boolean, nullable=False, default=False)
    slots = Column(JSON, nullable=False, default=list)
    reason = Column(String(200), nullable=True)

    schedule = relationship("ProviderSchedule", back_populates="exceptions")

    __table_args__ = (
        UniqueConstraint("schedule_id", "exception_date", name="uq_schedule_exception_date"),
    )
