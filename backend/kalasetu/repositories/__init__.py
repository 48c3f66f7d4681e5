from .base_repository import BaseRepository
from .factory import RepositoryFactory
from .provider_repository import ProviderRepository
from .reservation_repository import ReservationRepository
from .schedule_repository import ScheduleRepository

__all__ = [
    "BaseRepository",
    "ProviderRepository",
    "RepositoryFactory",
    "ReservationRepository",
    "ScheduleRepository",
]
