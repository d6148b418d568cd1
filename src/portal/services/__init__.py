"""
Byte Portal Services

Business logic services for the portal.
"""
from .access_service import can_read, can_edit, filter_readable
from .mention_service import MentionService
from .recipient_service import RecipientService
from .notification_service import NotificationService
from .calendar_service import CalendarService, expand_events
from .post_service import PostService
from .engine_service import EngineService

__all__ = [
    'can_read',
    'can_edit',
    'filter_readable',
    'MentionService',
    'RecipientService',
    'NotificationService',
    'CalendarService',
    'expand_events',
    'PostService',
    'EngineService',
]
