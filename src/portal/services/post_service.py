"""
Post Service

Publishing and reading posts.
Publishing stores the post first, then fans notifications out; a fan-out
problem never undoes or fails the publish.
"""
import logging
from typing import Optional, List, Tuple

from ..models.member import Member
from ..models.notification import DispatchReport
from ..models.post import CATEGORIES, Post, PostPermission, normalize_attachments
from ..storage.member_storage import MemberStorage
from ..storage.post_storage import PostStorage
from .access_service import filter_readable
from .mention_service import MentionService
from .notification_service import NotificationService
from .recipient_service import RecipientService

logger = logging.getLogger("byte.services.post")


class PostService:
    """Service for post operations"""

    def __init__(
        self,
        post_storage: PostStorage,
        member_storage: MemberStorage,
        mention_service: MentionService,
        recipient_service: RecipientService,
        notification_service: NotificationService,
    ):
        self.post_storage = post_storage
        self.member_storage = member_storage
        self.mention_service = mention_service
        self.recipient_service = recipient_service
        self.notification_service = notification_service

    async def publish(
        self,
        author: Member,
        title: str,
        content: str = "",
        category: str = "일반",
        department: Optional[str] = None,
        pinned: bool = False,
        attachments: Optional[list] = None,
        permission: Optional[PostPermission] = None,
    ) -> Tuple[Post, DispatchReport]:
        """
        Create a post and notify mentioned / department members.

        Returns the stored post and the fan-out report. Raises ValueError for
        a blank title, an unknown category or an unrecognized permission level.
        """
        if not title or not title.strip():
            raise ValueError("title is required")
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category}")
        if permission is not None and permission.level is None:
            raise ValueError("Unrecognized permission level")

        post = Post(
            title=title.strip(),
            content=content or "",
            author_id=author.id,
            author_name=author.name,
            department=department or author.department,
            category=category,
            pinned=pinned,
            attachments=normalize_attachments(attachments),
            permission=permission,
        )
        created = await self.post_storage.create(post)
        logger.info(f"Created post {created.id} '{created.title}' by member {author.id}")

        report = await self._fan_out(created, author)
        return created, report

    async def _fan_out(self, post: Post, author: Member) -> DispatchReport:
        """Resolve and dispatch notifications for a stored post"""
        try:
            mentions = self.mention_service.extract_mentions(post.content)
            roster = await self.member_storage.list_roster()
            targets = self.recipient_service.resolve(post, mentions, roster, post.author_id)
            return await self.notification_service.dispatch(targets, post, author)
        except Exception as e:
            logger.error(f"Notification fan-out failed for post {post.id}: {e}")
            return DispatchReport(errors=[str(e)])

    async def list_posts(
        self,
        viewer: Optional[Member],
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Post]:
        """
        Posts viewer may read, pinned first then newest first.

        search matches a substring of the title or the author name.
        """
        if category == "전체":
            category = None
        posts = await self.post_storage.list_all(category)
        if search:
            posts = [p for p in posts if search in p.title or search in p.author_name]
        return filter_readable(viewer, posts)

    async def get_post(self, post_id: int) -> Optional[Post]:
        """Get post by ID without permission checks"""
        return await self.post_storage.get_by_id(post_id)
