# backend/kalasetu/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Services are built per request from the request-scoped session and the
regional clock; tests override ``get_db`` and ``get_regional_clock``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...core.clock import Clock, get_regional_clock
from ...database import get_db
from ...services.availability_service import AvailabilityService


def get_availability_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_regional_clock),
) -> AvailabilityService:
    """
    Get availability service instance.

    Args:
        db: Database session
        clock: Regional clock

    Returns:
        AvailabilityService bound to this request's snapshot
    """
    return AvailabilityService(db, clock)
