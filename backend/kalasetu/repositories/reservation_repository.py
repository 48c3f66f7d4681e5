# backend/kalasetu/repositories/reservation_repository.py
"""
Reservation Repository

Fetches the reservations that occupy a provider's calendar inside a time
window. Only pending/confirmed reservations are returned.
"""

from datetime import datetime
from typing import List

import pytz
from sqlalchemy.orm import Session

from ..core.enums import ReservationStatus
from ..domain.availability import ReservationSnapshot
from ..models.reservation import Reservation
from .base_repository import BaseRepository


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are UTC.
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


class ReservationRepository(BaseRepository[Reservation]):
    """Read access to reservations for conflict detection."""

    def __init__(self, db: Session):
        super().__init__(db, Reservation)

    def get_active_in_window(
        self, provider_id: str, window_start: datetime, window_end: datetime
    ) -> List[ReservationSnapshot]:
        """
        Reservations whose interval overlaps ``[window_start, window_end)``.

        Overlap condition: start < window_end AND end > window_start.
        Results are ordered by start time.
        """
        window_start_utc = _as_utc(window_start)
        window_end_utc = _as_utc(window_end)
        if self.db.get_bind().dialect.name == "sqlite":
            # SQLite compares the stored naive text representation.
            window_start_utc = window_start_utc.replace(tzinfo=None)
            window_end_utc = window_end_utc.replace(tzinfo=None)

        statuses = [status.value for status in ReservationStatus.blocking()]
        query = (
            self._build_query()
            .filter(
                Reservation.provider_id == provider_id,
                Reservation.status.in_(statuses),
                Reservation.start_at < window_end_utc,
                Reservation.end_at > window_start_utc,
            )
            .order_by(Reservation.start_at)
        )
        rows = self._execute_query(query)
        return [
            ReservationSnapshot(
                id=row.id,
                start_at=_as_utc(row.start_at),
                end_at=_as_utc(row.end_at),
                status=ReservationStatus(row.status),
            )
            for row in rows
        ]
