"""
Byte Portal Storage Layer

PostgreSQL storage implementations for portal entities.
"""
from .base import BaseStorage
from .member_storage import MemberStorage
from .post_storage import PostStorage
from .calendar_storage import CalendarStorage
from .notification_storage import NotificationStorage

__all__ = [
    'BaseStorage',
    'MemberStorage',
    'PostStorage',
    'CalendarStorage',
    'NotificationStorage',
]
