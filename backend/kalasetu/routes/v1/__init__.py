# backend/kalasetu/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import artisans

__all__ = ["artisans"]
