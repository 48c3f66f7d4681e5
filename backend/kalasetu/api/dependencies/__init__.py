# backend/kalasetu/api/dependencies/__init__.py
"""
Central export point for all dependencies.
"""

from ...core.clock import get_regional_clock
from ...database import get_db
from .services import get_availability_service

__all__ = [
    # Database
    "get_db",
    # Clock
    "get_regional_clock",
    # Services
    "get_availability_service",
]
