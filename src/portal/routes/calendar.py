"""
Calendar Routes

Endpoints for calendar rendering.
"""
import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Depends

from ..models.member import Member
from ..services.calendar_service import is_event_visible
from ..services.engine_service import get_engine_service
from .auth import get_current_user

logger = logging.getLogger("byte.routes.calendar")
router = APIRouter(prefix="/calendar", tags=["calendar"])

MAX_WINDOW_DAYS = 366


@router.get("/days")
async def get_days(
    start: date,
    end: date,
    current_user: Member = Depends(get_current_user),
):
    """Events per day in [start, end] visible to the current member"""
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    if (end - start).days > MAX_WINDOW_DAYS:
        raise HTTPException(status_code=400, detail=f"Window larger than {MAX_WINDOW_DAYS} days")

    engine = get_engine_service()
    index = await engine.calendar_service.get_day_index(current_user, start, end)
    return {
        "days": {
            day: [event.to_dict() for event in events]
            for day, events in index.items()
        }
    }


@router.get("/events/{event_id}")
async def get_event(
    event_id: str,
    current_user: Member = Depends(get_current_user),
):
    """Get one event; restricted events are hidden from other departments"""
    engine = get_engine_service()
    event = await engine.calendar_service.get_event(event_id)
    if not event or not is_event_visible(event, current_user):
        raise HTTPException(status_code=404, detail="Event not found")
    return {"event": event.to_dict()}
