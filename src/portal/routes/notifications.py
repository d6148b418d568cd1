"""
Notification Routes

Endpoints for reading and acknowledging in-app notifications.
"""
import logging

from fastapi import APIRouter, HTTPException, Depends

from ..models.member import Member
from ..services.engine_service import get_engine_service
from .auth import get_current_user

logger = logging.getLogger("byte.routes.notifications")
router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    limit: int = 50,
    current_user: Member = Depends(get_current_user),
):
    """Newest notifications for the current member"""
    engine = get_engine_service()
    notifications = await engine.notification_service.list_notifications(
        current_user.id, limit=max(1, min(limit, 100))
    )
    return {"notifications": [n.to_dict() for n in notifications]}


@router.get("/unread-count")
async def unread_count(current_user: Member = Depends(get_current_user)):
    """Number of unread notifications"""
    engine = get_engine_service()
    count = await engine.notification_service.unread_count(current_user.id)
    return {"count": count}


@router.post("/read-all")
async def mark_all_read(current_user: Member = Depends(get_current_user)):
    """Mark every notification of the current member as read"""
    engine = get_engine_service()
    updated = await engine.notification_service.mark_all_read(current_user.id)
    return {"success": True, "updated": updated}


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: int,
    current_user: Member = Depends(get_current_user),
):
    """Mark one notification as read"""
    engine = get_engine_service()
    updated = await engine.notification_service.mark_read(notification_id, current_user.id)
    if not updated:
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"success": True}
