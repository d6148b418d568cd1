"""
Health Check Routes

Liveness and readiness probes.
"""
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .. import __version__
from ..services.engine_service import get_engine_service

router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
@router.get("/")
async def health_check():
    return {"status": "healthy", "service": "byte-portal", "version": __version__, "timestamp": _now()}


@router.get("/ready")
async def readiness_check():
    """Ready once every storage is connected; 503 before that"""
    engine = get_engine_service()
    body = {
        "ready": engine.is_initialized,
        "email_enabled": engine.notification_service.email_enabled,
        "pending_emails": engine.notification_service.pending_emails,
        "timestamp": _now(),
    }
    return JSONResponse(body, status_code=200 if engine.is_initialized else 503)


@router.get("/live")
async def liveness_check():
    return {"alive": True, "timestamp": _now()}
