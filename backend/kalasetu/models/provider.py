# backend/kalasetu/models/provider.py
"""
Provider profile projection.

Only the columns the availability engine reads are mapped here. The profile
itself is owned and edited by the provider-facing profile workflow.
"""

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Provider(Base):
    """
    Service provider ("artisan") as seen by the availability engine.

    ``working_hours`` is the legacy weekly configuration, keyed by lowercase
    day name::

        {"monday": {"start": "09:00", "end": "17:00", "active": true}, ...}
    """

    __tablename__ = "providers"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    public_id = Column(String(64), nullable=False, unique=True, index=True)
    display_name = Column(String(200), nullable=True)

    working_hours = Column(JSON, nullable=False, default=dict)
    minimum_booking_notice_hours = Column(Integer, nullable=False, default=0)
    buffer_time_minutes = Column(Integer, nullable=False, default=0)
    max_bookings_per_day = Column(Integer, nullable=False, default=0)  # 0 = unlimited

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    schedule = relationship(
        "ProviderSchedule", back_populates="provider", uselist=False, lazy="select"
    )

    __table_args__ = (
        CheckConstraint(
            "minimum_booking_notice_hours >= 0 AND minimum_booking_notice_hours <= 168",
            name="ck_providers_notice_hours",
        ),
        CheckConstraint(
            "buffer_time_minutes >= 0 AND buffer_time_minutes <= 480",
            name="ck_providers_buffer_minutes",
        ),
        CheckConstraint("max_bookings_per_day >= 0", name="ck_providers_max_per_day"),
    )

    def __repr__(self) -> str:
        return f"<Provider {self.public_id}>"
