# backend/kalasetu/models/reservation.py
"""
Reservation model.

Reservations are created and transitioned exclusively by the booking
workflow. The availability engine reads the time interval and status only.
Instants are stored in UTC.
"""

from datetime import datetime

import pytz
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import validates
from sqlalchemy.sql import func
import ulid

from ..core.enums import ReservationStatus
from ..database import Base


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    provider_id = Column(String(26), ForeignKey("providers.id"), nullable=False)
    customer_id = Column(String(26), nullable=True)

    start_at = Column(DateTime(timezone=True), nullable=False)
    end_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default=ReservationStatus.PENDING.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("end_at > start_at", name="ck_reservations_interval"),
        Index("ix_reservations_provider_window", "provider_id", "start_at", "end_at"),
    )

    @validates("start_at", "end_at")
    def _normalize_instant(self, key: str, value: datetime) -> datetime:
        # Persist UTC; SQLite drops tzinfo without converting.
        if value is not None and value.tzinfo is not None:
            return value.astimezone(pytz.UTC)
        return value

    def __repr__(self) -> str:
        return f"<Reservation {self.id} {self.status} {self.start_at}-{self.end_at}>"
