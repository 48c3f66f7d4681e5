from .availability_service import AvailabilityService
from .base import BaseService
from .conflict_detector import ConflictDetector
from .policy_enforcer import PolicyEnforcer
from .schedule_resolver import ScheduleResolver
from .slot_generator import SlotGenerator

__all__ = [
    "AvailabilityService",
    "BaseService",
    "ConflictDetector",
    "PolicyEnforcer",
    "ScheduleResolver",
    "SlotGenerator",
]
