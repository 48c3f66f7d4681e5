# backend/kalasetu/repositories/provider_repository.py
"""
Provider Repository

Reads the provider profile projection and copies it into an immutable
ProviderSnapshot for the availability engine.
"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core.constants import DAY_NAMES
from ..domain.availability import LegacyDayHours, ProviderSnapshot
from ..models.provider import Provider
from .base_repository import BaseRepository


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _legacy_hours(raw: Any) -> Dict[str, LegacyDayHours]:
    """Convert the stored working_hours JSON, skipping entries that are not objects."""
    if not isinstance(raw, dict):
        return {}
    hours: Dict[str, LegacyDayHours] = {}
    for day_name in DAY_NAMES:
        entry = raw.get(day_name)
        if not isinstance(entry, dict):
            continue
        hours[day_name] = LegacyDayHours(
            start=entry.get("start"),
            end=entry.get("end"),
            active=bool(entry.get("active", False)),
        )
    return hours


class ProviderRepository(BaseRepository[Provider]):
    """Read access to provider profiles."""

    def __init__(self, db: Session):
        super().__init__(db, Provider)

    def get_by_public_id(self, public_id: str) -> Optional[Provider]:
        return self.find_one_by(public_id=public_id)

    def get_snapshot_by_public_id(self, public_id: str) -> Optional[ProviderSnapshot]:
        provider = self.get_by_public_id(public_id)
        if provider is None:
            return None
        return self.to_snapshot(provider)

    @staticmethod
    def to_snapshot(provider: Provider) -> ProviderSnapshot:
        return ProviderSnapshot(
            id=provider.id,
            public_id=provider.public_id,
            working_hours=_legacy_hours(provider.working_hours),
            minimum_booking_notice_hours=_optional_int(provider.minimum_booking_notice_hours),
            buffer_time_minutes=_optional_int(provider.buffer_time_minutes),
            max_bookings_per_day=_optional_int(provider.max_bookings_per_day) or 0,
        )
