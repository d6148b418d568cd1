"""
Shared fixtures and in-memory fakes for the portal tests.

The fakes mirror the storage / transport method signatures used by the
services, so no database or SMTP server is needed.
"""
from datetime import datetime
from typing import Dict, List, Optional

import pytest

from portal.models import CalendarEvent, Member, Notification, Post, Role
from portal.notifications.base_sender import BaseSender, EmailMessage, SendResult


class FakeMemberStorage:
    """Roster kept in a dict"""

    def __init__(self, members: List[Member]):
        self.members: Dict[int, Member] = {m.id: m for m in members}

    async def get_by_id(self, member_id: int) -> Optional[Member]:
        return self.members.get(member_id)

    async def list_roster(self) -> List[Member]:
        return [m for m in self.members.values() if m.active and m.approved]


class FakeNotificationStorage:
    """Notification store that can be told to fail for given members"""

    def __init__(self, fail_for=()):
        self.records: List[Notification] = []
        self.fail_for = set(fail_for)
        self._next_id = 1

    async def create(self, notification: Notification) -> Notification:
        if notification.user_id in self.fail_for:
            raise RuntimeError("database unavailable")
        notification.id = self._next_id
        self._next_id += 1
        self.records.append(notification)
        return notification

    async def list_by_user(self, user_id: int, limit: int = 50) -> List[Notification]:
        return [n for n in reversed(self.records) if n.user_id == user_id][:limit]

    async def unread_count(self, user_id: int) -> int:
        return sum(1 for n in self.records if n.user_id == user_id and not n.read)

    async def mark_read(self, notification_id: int, user_id: int) -> bool:
        for n in self.records:
            if n.id == notification_id and n.user_id == user_id:
                n.read = True
                return True
        return False

    async def mark_all_read(self, user_id: int) -> int:
        count = 0
        for n in self.records:
            if n.user_id == user_id and not n.read:
                n.read = True
                count += 1
        return count

    def for_user(self, user_id: int) -> List[Notification]:
        return [n for n in self.records if n.user_id == user_id]


class FakeSender(BaseSender):
    """Mail transport that records attempts and raises for chosen addresses"""

    def __init__(self, raise_for=(), fail_for=(), configured: bool = True):
        self.attempts: List[EmailMessage] = []
        self.raise_for = set(raise_for)
        self.fail_for = set(fail_for)
        self.configured = configured
        self.closed = False

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def send(self, message: EmailMessage) -> SendResult:
        self.attempts.append(message)
        if message.to in self.raise_for:
            raise ConnectionError("SMTP connection reset")
        if message.to in self.fail_for:
            return SendResult(success=False, error="550 mailbox unavailable")
        return SendResult(success=True)

    async def close(self):
        self.closed = True

    def recipients(self) -> List[str]:
        return [m.to for m in self.attempts]


class FakePostStorage:
    def __init__(self):
        self.posts: Dict[int, Post] = {}
        self._next_id = 1

    async def create(self, post: Post) -> Post:
        post.id = self._next_id
        self._next_id += 1
        self.posts[post.id] = post
        return post

    async def get_by_id(self, post_id: int) -> Optional[Post]:
        return self.posts.get(post_id)

    async def list_all(self, category: Optional[str] = None) -> List[Post]:
        posts = [p for p in self.posts.values() if category is None or p.category == category]
        return sorted(posts, key=lambda p: (not p.pinned, -p.created_at.timestamp()))


class FakeCalendarStorage:
    def __init__(self, events: List[CalendarEvent]):
        self.events = events
        self.queries = []

    async def find_in_range(self, start, end) -> List[CalendarEvent]:
        self.queries.append((start, end))
        return [
            e for e in self.events
            if e.date is not None and e.date <= end and max(e.end_date or e.date, e.date) >= start
        ]

    async def get_by_id(self, event_id: str) -> Optional[CalendarEvent]:
        return next((e for e in self.events if e.id == event_id), None)


@pytest.fixture
def roster() -> List[Member]:
    """A small organization roster"""
    return [
        Member(id=1, name="김회장", email="president@byte.kr", department="총관리", role=Role.PRESIDENT),
        Member(id=2, name="이부장", email="dev.lead@byte.kr", department="개발부", role=Role.MANAGER),
        Member(id=3, name="박부원", email="dev1@byte.kr", department="개발부", role=Role.MEMBER),
        Member(id=4, name="최부원", email="", department="개발부", role=Role.MEMBER),
        Member(id=5, name="정기획", email="plan@byte.kr", department="기획부", role=Role.MEMBER),
        Member(
            id=6, name="한부원", email="dev2@byte.kr", department="개발부",
            role=Role.MEMBER, email_notification_enabled=False,
        ),
        Member(id=7, name="윤휴면", email="old@byte.kr", department="개발부", role=Role.MEMBER, active=False),
        Member(id=8, name="오부회장", email="vp@byte.kr", department="사무부", role=Role.VICE_PRESIDENT),
    ]


@pytest.fixture
def member_storage(roster) -> FakeMemberStorage:
    return FakeMemberStorage(roster)


@pytest.fixture
def notification_storage() -> FakeNotificationStorage:
    return FakeNotificationStorage()


@pytest.fixture
def sender() -> FakeSender:
    return FakeSender()


def mention(member_id, name="someone") -> str:
    """Editor markup for a mention"""
    return f'<span contenteditable="false" data-mention="{member_id}" style="color: #1976d2">@{name}</span>'


def make_post(**kwargs) -> Post:
    defaults = dict(id=100, title="주간 회의록", content="", author_id=1, author_name="김회장",
                    department="총관리", created_at=datetime(2024, 5, 1, 9, 0))
    defaults.update(kwargs)
    return Post(**defaults)
