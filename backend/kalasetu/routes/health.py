# backend/kalasetu/routes/health.py
"""
Health check endpoints for the application.

These endpoints are used for monitoring application health
and database connectivity.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import __version__
from ..core.config import settings
from ..core.constants import BRAND_NAME
from ..database import get_db
from ..schemas.base_responses import HealthCheckResponse, LiveHealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/live", response_model=LiveHealthResponse)
def live_probe(response: Response) -> LiveHealthResponse:
    """Liveness probe that avoids touching external dependencies."""

    response.headers["Cache-Control"] = "no-store"
    return LiveHealthResponse(ok=True)


@router.get("/health", response_model=HealthCheckResponse)
def health_check(db: Session = Depends(get_db)) -> HealthCheckResponse:
    """
    Basic health check endpoint.

    Returns:
        Service status; "degraded" when the database cannot be reached.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = True
        status = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db_status = False
        status = "degraded"

    return HealthCheckResponse(
        status=status,
        service=f"{BRAND_NAME} Availability API",
        version=__version__,
        environment=settings.environment,
        database=db_status,
    )
