"""
Notification Models

Notification: in-app notification record shown to one member.
RecipientTargets: who a publish event notifies, split by cause.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class NotificationType(str, Enum):
    """Cause of a notification"""
    MENTION = "mention"
    POST = "post"
    EVENT = "event"
    AGENDA = "agenda"


@dataclass
class Notification:
    """
    Notification record.

    Created once per (recipient, publish event) by the dispatcher.
    Only the read flag changes afterwards.
    """
    id: Optional[int] = None                             # assigned by the store
    user_id: int = 0
    type: NotificationType = NotificationType.POST
    title: str = ""
    message: str = ""
    related_post_id: Optional[int] = None
    related_event_id: Optional[str] = None
    related_agenda_id: Optional[int] = None
    read: bool = False

    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response"""
        return {
            "id": self.id,
            "userId": self.user_id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "relatedPostId": self.related_post_id,
            "relatedEventId": self.related_event_id,
            "relatedAgendaId": self.related_agenda_id,
            "read": self.read,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class RecipientTargets:
    """
    Notification targets for one publish event.

    The two lists are disjoint and never contain the author.
    """
    mention_targets: List[int] = field(default_factory=list)
    department_targets: List[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.mention_targets) + len(self.department_targets)


@dataclass
class DispatchReport:
    """Outcome of the persistence leg of a fan-out"""
    notified: List[int] = field(default_factory=list)    # records stored
    failed: List[int] = field(default_factory=list)      # store errors / unknown members
    emails_scheduled: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "notified": list(self.notified),
            "failed": list(self.failed),
            "emails_scheduled": self.emails_scheduled,
        }
