"""
Recipient Service

Decides who is notified when a post is published.
"""
import logging
from typing import Iterable, List

from ..models.member import Member
from ..models.notification import RecipientTargets
from ..models.post import Post, PermissionLevel

logger = logging.getLogger("byte.services.recipient")


class RecipientService:
    """
    Resolves notification targets for a publish event.

    - Mentioned members get a mention notification (never the author).
    - For department-scoped posts, every roster member of an allowed
      department gets a post notification, unless they are the author
      or already notified by mention.
    """

    def resolve(
        self,
        post: Post,
        mentions: Iterable[int],
        roster: Iterable[Member],
        author_id: int,
    ) -> RecipientTargets:
        """Return disjoint mention/department target lists"""
        mention_targets: List[int] = []
        for member_id in mentions:
            if member_id != author_id and member_id not in mention_targets:
                mention_targets.append(member_id)

        department_targets: List[int] = []
        permission = post.permission
        if (
            permission is not None
            and permission.level == PermissionLevel.DEPARTMENT
            and permission.allowed_departments
        ):
            allowed = set(permission.allowed_departments)
            excluded = set(mention_targets)
            excluded.add(author_id)
            for member in roster:
                if member.department in allowed and member.id not in excluded:
                    department_targets.append(member.id)
                    excluded.add(member.id)

        logger.debug(
            f"Post {post.id}: {len(mention_targets)} mention target(s), "
            f"{len(department_targets)} department target(s)"
        )
        return RecipientTargets(
            mention_targets=mention_targets,
            department_targets=department_targets,
        )
