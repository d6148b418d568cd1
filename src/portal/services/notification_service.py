"""
Notification Service

Fans a publish event out to its recipients.

For each recipient, independently:
1. Stores an in-app notification record (awaited)
2. Schedules a best-effort email as a detached task (not awaited)

A failure for one recipient is logged and never affects the others or the
publish that triggered the fan-out. Nothing is retried.
"""
import asyncio
import logging
from typing import Optional, List, Set

from ..errors import EmailDispatchFailure, NotificationPersistFailure
from ..models.member import Member
from ..models.notification import (
    DispatchReport,
    Notification,
    NotificationType,
    RecipientTargets,
)
from ..models.post import Post
from ..notifications.base_sender import BaseSender, EmailMessage, SendResult
from ..notifications.templates import KIND_DEPARTMENT, KIND_MENTION, render_post_email
from ..storage.member_storage import MemberStorage
from ..storage.notification_storage import NotificationStorage

logger = logging.getLogger("byte.services.notification")


class NotificationService:
    """
    Notification dispatcher.

    Mention targets always get an email attempt when they have an address.
    Department targets additionally need email notifications enabled.
    """

    def __init__(
        self,
        member_storage: MemberStorage,
        notification_storage: NotificationStorage,
        sender: Optional[BaseSender] = None,
        site_url: str = "http://localhost:3000",
    ):
        self.member_storage = member_storage
        self.notification_storage = notification_storage
        self.sender = sender
        self.site_url = site_url
        self._pending: Set[asyncio.Task] = set()

    @property
    def email_enabled(self) -> bool:
        return self.sender is not None and self.sender.is_configured

    async def dispatch(
        self, targets: RecipientTargets, post: Post, author: Optional[Member] = None
    ) -> DispatchReport:
        """
        Store notifications for every target and schedule their emails.

        Returns once all records are stored (or their failures logged);
        emails keep running in the background. author defaults to the
        name stored on the post.
        """
        report = DispatchReport()
        if not len(targets):
            return report

        if not self.email_enabled:
            logger.info("Email delivery disabled (SMTP not configured), storing notifications only")

        author_name = author.name if author is not None else post.author_name

        for member_id in targets.mention_targets:
            await self._notify_member(member_id, NotificationType.MENTION, post, author_name, report)

        for member_id in targets.department_targets:
            await self._notify_member(member_id, NotificationType.POST, post, author_name, report)

        logger.info(
            f"Post {post.id} fan-out: {len(report.notified)} stored, "
            f"{len(report.failed)} failed, {report.emails_scheduled} email(s) scheduled"
        )
        return report

    async def _notify_member(
        self,
        member_id: int,
        notification_type: NotificationType,
        post: Post,
        author_name: str,
        report: DispatchReport,
    ) -> None:
        """Store one notification and schedule its email; never raises"""
        try:
            member = await self.member_storage.get_by_id(member_id)
        except Exception as e:
            failure = NotificationPersistFailure(member_id, e)
            logger.error(str(failure))
            report.failed.append(member_id)
            report.errors.append(str(failure))
            return

        if member is None:
            logger.warning(f"Post {post.id}: member {member_id} not found, skipping notification")
            report.failed.append(member_id)
            return

        try:
            notification = self._build_notification(member, notification_type, post, author_name)
            await self.notification_storage.create(notification)
            report.notified.append(member_id)
        except Exception as e:
            # The email leg is independent of the record; it still goes out
            failure = NotificationPersistFailure(member_id, e)
            logger.error(str(failure))
            report.failed.append(member_id)
            report.errors.append(str(failure))

        try:
            message = self._build_email(member, notification_type, post, author_name)
        except Exception as e:
            failure = EmailDispatchFailure(member_id, f"could not render email: {e}")
            logger.warning(str(failure))
            report.errors.append(str(failure))
            return

        if message is not None:
            self._schedule_email(member_id, message)
            report.emails_scheduled += 1

    def _build_notification(
        self, member: Member, notification_type: NotificationType, post: Post, author_name: str
    ) -> Notification:
        if notification_type == NotificationType.MENTION:
            title = f"{author_name}님이 게시글에서 당신을 언급했습니다"
        else:
            title = f"{author_name}님이 {member.department} 부서 게시글을 작성했습니다"
        return Notification(
            user_id=member.id,
            type=notification_type,
            title=title,
            message=post.title,
            related_post_id=post.id,
        )

    def _build_email(
        self, member: Member, notification_type: NotificationType, post: Post, author_name: str
    ) -> Optional[EmailMessage]:
        """Rendered email for member, or None when no email should be sent"""
        if not self.email_enabled or not member.email:
            return None

        if notification_type == NotificationType.MENTION:
            kind, department = KIND_MENTION, None
        else:
            if not member.email_notification_enabled:
                return None
            kind, department = KIND_DEPARTMENT, member.department

        return render_post_email(
            kind=kind,
            to_email=member.email,
            to_name=member.name,
            author=author_name,
            title=post.title,
            content=post.content,
            post_id=post.id,
            site_url=self.site_url,
            department=department,
        )

    def _schedule_email(self, member_id: int, message: EmailMessage) -> None:
        task = asyncio.create_task(self._send_email(member_id, message))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send_email(self, member_id: int, message: EmailMessage) -> SendResult:
        """Single delivery attempt; outcome is logged, never raised"""
        try:
            result = await self.sender.send(message)
        except Exception as e:
            result = SendResult(success=False, error=str(e) or type(e).__name__)

        if result.success:
            logger.debug(f"Notification email delivered to member {member_id}")
        else:
            logger.warning(str(EmailDispatchFailure(member_id, result.error or "unknown error")))
        return result

    @property
    def pending_emails(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for emails still in flight"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ============================================
    # Read side helpers
    # ============================================

    async def list_notifications(self, user_id: int, limit: int = 50) -> List[Notification]:
        """Get newest notifications for a member"""
        return await self.notification_storage.list_by_user(user_id, limit)

    async def unread_count(self, user_id: int) -> int:
        return await self.notification_storage.unread_count(user_id)

    async def mark_read(self, notification_id: int, user_id: int) -> bool:
        return await self.notification_storage.mark_read(notification_id, user_id)

    async def mark_all_read(self, user_id: int) -> int:
        return await self.notification_storage.mark_all_read(user_id)

    async def close(self):
        """Finish in-flight emails and release the transport"""
        await self.drain()
        if self.sender:
            await self.sender.close()
