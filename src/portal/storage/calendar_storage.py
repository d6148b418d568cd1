"""
Calendar Storage

PostgreSQL storage for calendar events.
"""
import logging
from datetime import date
from typing import Optional, List

from .base import BaseStorage
from ..models.calendar_event import CalendarEvent

logger = logging.getLogger("byte.storage.calendar")


class CalendarStorage(BaseStorage):
    """Storage for CalendarEvent entities"""

    async def get_by_id(self, event_id: str) -> Optional[CalendarEvent]:
        """Get event by ID"""
        query = "SELECT * FROM events WHERE id = $1"
        row = await self.fetchrow(query, event_id)
        return self._row_to_event(row) if row else None

    async def find_in_range(self, start: date, end: date) -> List[CalendarEvent]:
        """
        List events overlapping [start, end].

        Single-day events have end_date NULL and are matched on date alone.
        An end_date before date counts as ending on date, so such events
        still reach the expander, which clamps them.
        """
        query = """
            SELECT * FROM events
            WHERE date <= $2 AND GREATEST(COALESCE(end_date, date), date) >= $1
            ORDER BY date, start_time
        """
        rows = await self.fetch(query, start, end)
        return [self._row_to_event(row) for row in rows]

    def _row_to_event(self, row) -> CalendarEvent:
        """Convert database row to CalendarEvent"""
        return CalendarEvent(
            id=str(row["id"]),
            title=row["title"],
            description=row["description"],
            date=row["date"],
            end_date=row["end_date"],
            start_time=row["start_time"] or "",
            end_time=row["end_time"],
            location=row["location"],
            category=row["category"] or "기타",
            color=row["color"] or "#1d1d1f",
            post_id=row["post_id"],
            no_time=row["no_time"],
            is_period=row["is_period"],
            created_by=row["created_by"],
            allowed_departments=list(row["allowed_departments"] or []),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
