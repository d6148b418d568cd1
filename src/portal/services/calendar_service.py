"""
Calendar Service

Builds the per-day event index used to render the calendar.
Period events are placed on every day they span, subject to
department visibility.
"""
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from ..errors import MalformedEventSpan
from ..models.calendar_event import CalendarEvent
from ..models.member import Member
from ..storage.calendar_storage import CalendarStorage

logger = logging.getLogger("byte.services.calendar")

DayIndex = Dict[str, List[CalendarEvent]]


def is_event_visible(event: CalendarEvent, viewer: Optional[Member]) -> bool:
    """Department-restricted events are shown only to members of those departments"""
    if not event.allowed_departments:
        return True
    return viewer is not None and viewer.department in event.allowed_departments


def event_span(event: CalendarEvent) -> tuple:
    """
    (start, end) days of an event, inclusive.

    An end date before the start date is clamped to the start date.
    """
    if event.date is None:
        raise ValueError(f"Event {event.id} has no date")
    start = event.date
    end = event.end_date or start
    if end < start:
        logger.warning(str(MalformedEventSpan(event.id, start, end)))
        end = start
    return start, end


def expand_events(events: Iterable[CalendarEvent], viewer: Optional[Member]) -> DayIndex:
    """
    Map ISO day -> visible events on that day.

    Each event appears at most once per day. A broken event is logged and
    skipped; the rest of the index is still built.
    """
    index: DayIndex = {}
    for event in events:
        if not is_event_visible(event, viewer):
            continue
        try:
            start, end = event_span(event)
        except ValueError as e:
            logger.warning(f"Skipping calendar event: {e}")
            continue

        day = start
        while day <= end:
            bucket = index.setdefault(day.isoformat(), [])
            if not any(existing.id == event.id for existing in bucket):
                bucket.append(event)
            day += timedelta(days=1)
    return index


class CalendarService:
    """Service for calendar rendering"""

    def __init__(self, calendar_storage: CalendarStorage):
        self.storage = calendar_storage

    async def get_day_index(
        self, viewer: Optional[Member], start: date, end: date
    ) -> DayIndex:
        """
        Day index for the window [start, end] as seen by viewer.

        Period events that begin before or end after the window only
        contribute the days inside it.
        """
        if end < start:
            raise ValueError("end must not be before start")

        events = await self.storage.find_in_range(start, end)
        index = expand_events(events, viewer)

        lower, upper = start.isoformat(), end.isoformat()
        return {day: bucket for day, bucket in sorted(index.items()) if lower <= day <= upper}

    async def get_event(self, event_id: str) -> Optional[CalendarEvent]:
        """Get event by ID"""
        return await self.storage.get_by_id(event_id)
