# backend/kalasetu/main.py
"""
Kalasetu availability API.

Run with ``uvicorn kalasetu.main:app`` from the ``backend`` directory.
"""

import logging

from fastapi import APIRouter, FastAPI

from . import __version__
from .core.config import settings
from .core.constants import BRAND_NAME
from .errors import register_error_handlers
from .routes import health, prometheus
from .routes.v1 import artisans as artisans_v1

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

API_TITLE = f"{BRAND_NAME} Availability API"
API_DESCRIPTION = "Bookable time slots for marketplace artisans."


def create_app() -> FastAPI:
    application = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    register_error_handlers(application)

    # Create API v1 router
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(artisans_v1.router, prefix="/artisans")

    application.include_router(api_v1)
    application.include_router(health.router)
    application.include_router(prometheus.router)

    logger.info(
        "%s started (environment=%s, regional offset=%+d min)",
        API_TITLE,
        settings.environment,
        settings.regional_utc_offset_minutes,
    )
    return application


app = create_app()
