"""
Access Service

Read/edit permission checks for posts.
All checks are pure apart from a one-time warning for misconfigured posts.
"""
import logging
from functools import lru_cache
from typing import Iterable, List, Optional

from ..errors import MalformedPermissionConfig
from ..models.member import Member, Role, role_rank
from ..models.post import Post, PermissionLevel

logger = logging.getLogger("byte.services.access")


@lru_cache(maxsize=1024)
def _warn_malformed_permission(post_id: int) -> None:
    # Cached per post id so each misconfigured post is reported once
    logger.warning(str(MalformedPermissionConfig(post_id)))


def can_read(viewer: Optional[Member], post: Post) -> bool:
    """
    Check whether viewer may read post.

    Rules, in order:
    1. No viewer -> deny
    2. Author -> allow, whatever the permission says
    3. No permission -> allow
    4. ALL -> allow
    5. MANAGER_UP -> role rank at least MANAGER
    6. DEPARTMENT -> viewer department in a non-empty allow-list
    7. AUTHOR_ONLY -> deny
    8. Anything else -> deny
    """
    if viewer is None:
        return False

    if viewer.id == post.author_id:
        return True

    permission = post.permission
    if permission is None:
        return True

    level = permission.level
    if level == PermissionLevel.ALL:
        return True

    if level == PermissionLevel.MANAGER_UP:
        return role_rank(viewer.role) >= role_rank(Role.MANAGER)

    if level == PermissionLevel.DEPARTMENT:
        if not permission.allowed_departments:
            _warn_malformed_permission(post.id)
            return False
        return viewer.department in permission.allowed_departments

    # AUTHOR_ONLY (author already handled) and unrecognized levels
    return False


def filter_readable(viewer: Optional[Member], posts: Iterable[Post]) -> List[Post]:
    """Keep only the posts viewer may read, preserving order"""
    return [post for post in posts if can_read(viewer, post)]


def can_edit(viewer: Optional[Member], post: Post) -> bool:
    """Author, or vice-president and above, may edit/delete a post"""
    if viewer is None:
        return False
    if viewer.id == post.author_id:
        return True
    return role_rank(viewer.role) >= role_rank(Role.VICE_PRESIDENT)
