# backend/kalasetu/routes/v1/artisans.py
"""
V1 public artisan routes.

No authentication: customers check an artisan's bookable slots before
signing in. Responses are computed per request and never cached, so a slot
shown as available is advisory until the booking workflow accepts it.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...api.dependencies.services import get_availability_service
from ...core.exceptions import DomainException
from ...schemas.availability import DayAvailabilityResponse
from ...services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

# V1 router - mounted under /api/v1/artisans
router = APIRouter(tags=["artisans"])


@router.get(
    "/{public_id}/availability",
    response_model=DayAvailabilityResponse,
    response_model_exclude_none=True,
    summary="Get an artisan's bookable slots for one date",
    responses={
        400: {"description": "Missing or malformed date"},
        404: {"description": "Artisan not found"},
    },
)
def get_artisan_availability(
    public_id: str,
    date: Optional[str] = Query(None, description="Date in YYYY-MM-DD format (regional calendar)"),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> DayAvailabilityResponse:
    """
    Get the slots a customer can book with an artisan on a given date.

    An empty ``slots`` list is a normal answer; ``meta.reason`` says why
    (past_date, too_far_ahead, day_off, closed or no_slots).

    Raises:
        400: If the date is missing or malformed
        404: If no artisan has this public id
    """
    try:
        return availability_service.get_day_availability(public_id, date)
    except DomainException as exc:
        raise exc.to_http_exception() from exc
