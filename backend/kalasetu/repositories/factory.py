# backend/kalasetu/repositories/factory.py
"""
Repository Factory for the Kalasetu platform

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .provider_repository import ProviderRepository
    from .reservation_repository import ReservationRepository
    from .schedule_repository import ScheduleRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_provider_repository(db: Session) -> "ProviderRepository":
        """Create repository for provider profile reads."""
        from .provider_repository import ProviderRepository

        return ProviderRepository(db)

    @staticmethod
    def create_schedule_repository(db: Session) -> "ScheduleRepository":
        """Create repository for recurring schedules and exceptions."""
        from .schedule_repository import ScheduleRepository

        return ScheduleRepository(db)

    @staticmethod
    def create_reservation_repository(db: Session) -> "ReservationRepository":
        """Create repository for reservation conflict reads."""
        from .reservation_repository import ReservationRepository

        return ReservationRepository(db)
