"""
Notification Storage

PostgreSQL storage for in-app notification records.
"""
import logging
from typing import List

from .base import BaseStorage
from ..models.notification import Notification, NotificationType

logger = logging.getLogger("byte.storage.notification")


class NotificationStorage(BaseStorage):
    """Storage for Notification entities"""

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification record"""
        query = """
            INSERT INTO notifications (
                user_id, type, title, message,
                related_post_id, related_event_id, related_agenda_id,
                read, created_at
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
            RETURNING *
        """
        row = await self.fetchrow(
            query,
            notification.user_id, notification.type.value,
            notification.title, notification.message,
            notification.related_post_id, notification.related_event_id,
            notification.related_agenda_id,
            notification.read, notification.created_at
        )
        return self._row_to_notification(row)

    async def list_by_user(self, user_id: int, limit: int = 50) -> List[Notification]:
        """List newest notifications for a member"""
        query = """
            SELECT * FROM notifications
            WHERE user_id = $1
            ORDER BY created_at DESC
            LIMIT $2
        """
        rows = await self.fetch(query, user_id, limit)
        return [self._row_to_notification(row) for row in rows]

    async def mark_read(self, notification_id: int, user_id: int) -> bool:
        """Mark one notification as read (only the owner's)"""
        query = "UPDATE notifications SET read = true WHERE id = $1 AND user_id = $2"
        result = await self.execute(query, notification_id, user_id)
        return "UPDATE 1" in result

    async def mark_all_read(self, user_id: int) -> int:
        """Mark all unread notifications of a member as read, return count"""
        query = "UPDATE notifications SET read = true WHERE user_id = $1 AND read = false"
        result = await self.execute(query, user_id)
        return int(result.split()[-1]) if result else 0

    async def unread_count(self, user_id: int) -> int:
        """Count unread notifications of a member"""
        query = "SELECT COUNT(*) FROM notifications WHERE user_id = $1 AND read = false"
        return await self.fetchval(query, user_id)

    def _row_to_notification(self, row) -> Notification:
        """Convert database row to Notification"""
        return Notification(
            id=row["id"],
            user_id=row["user_id"],
            type=NotificationType(row["type"]),
            title=row["title"],
            message=row["message"],
            related_post_id=row["related_post_id"],
            related_event_id=row["related_event_id"],
            related_agenda_id=row["related_agenda_id"],
            read=row["read"],
            created_at=row["created_at"],
        )
