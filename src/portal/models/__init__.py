"""
Byte Portal Data Models

Domain models for the Byte student-organization portal.
"""
from .member import Member, Role, ROLE_RANK, role_rank, parse_role
from .post import Post, PostPermission, PermissionLevel, Attachment, normalize_attachments
from .calendar_event import CalendarEvent
from .notification import Notification, NotificationType, RecipientTargets, DispatchReport

__all__ = [
    'Member',
    'Role',
    'ROLE_RANK',
    'role_rank',
    'parse_role',
    'Post',
    'PostPermission',
    'PermissionLevel',
    'Attachment',
    'normalize_attachments',
    'CalendarEvent',
    'Notification',
    'NotificationType',
    'RecipientTargets',
    'DispatchReport',
]
