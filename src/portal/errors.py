"""
Portal Errors

Typed causes for the failures the publish/calendar pipeline isolates.
None of these escape the pipeline: they are built per failing item or
per recipient so log lines and dispatch reports carry a concrete reason.
"""
from typing import Optional


class PortalError(Exception):
    """Base class for portal pipeline errors"""


class MalformedPermissionConfig(PortalError):
    """DEPARTMENT visibility configured without any allowed departments"""

    def __init__(self, post_id: Optional[int] = None):
        self.post_id = post_id
        super().__init__(
            f"Post {post_id} uses department visibility with no allowed departments"
        )


class NotificationPersistFailure(PortalError):
    """Storing a notification record for one recipient failed"""

    def __init__(self, user_id: int, cause: Exception):
        self.user_id = user_id
        self.cause = cause
        super().__init__(f"Could not store notification for user {user_id}: {cause}")


class EmailDispatchFailure(PortalError):
    """Sending a notification email to one recipient failed"""

    def __init__(self, user_id: int, reason: str):
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Email to user {user_id} failed: {reason}")


class MalformedEventSpan(PortalError):
    """Calendar event whose end date precedes its start date"""

    def __init__(self, event_id: str, start, end):
        self.event_id = event_id
        self.start = start
        self.end = end
        super().__init__(
            f"Event {event_id} ends ({end}) before it starts ({start}); clamped to one day"
        )
