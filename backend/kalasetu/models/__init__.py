from .provider import Provider
from .reservation import Reservation
from .schedule import ProviderSchedule, ScheduleException

__all__ = ["Provider", "ProviderSchedule", "Reservation", "ScheduleException"]
