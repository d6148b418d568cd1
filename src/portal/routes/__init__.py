"""
Byte Portal API Routes

FastAPI route handlers for the portal.
"""
from .health import router as health_router
from .posts import router as posts_router
from .calendar import router as calendar_router
from .notifications import router as notifications_router

__all__ = [
    'health_router',
    'posts_router',
    'calendar_router',
    'notifications_router',
]
