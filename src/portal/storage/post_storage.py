"""
Post Storage

PostgreSQL storage for posts.
"""
import logging
from typing import Optional, List

from .base import BaseStorage
from ..models.post import Post, PostPermission, PermissionLevel, normalize_attachments

logger = logging.getLogger("byte.storage.post")


class PostStorage(BaseStorage):
    """Storage for Post entities"""

    async def create(self, post: Post) -> Post:
        """
        Create a new post; id is assigned by the database.

        An unrecognized permission level cannot be stored: NULL in
        permission_read means "no restriction" when read back.
        """
        permission = post.permission
        if permission is not None and permission.level is None:
            raise ValueError(f"Post '{post.title}' has an unrecognized permission level")
        query = """
            INSERT INTO posts (
                title, content, author, author_id, department, category,
                pinned, views, attachments, permission_read,
                allowed_departments, created_at
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
            RETURNING *
        """
        row = await self.fetchrow(
            query,
            post.title, post.content, post.author_name, post.author_id,
            post.department, post.category, post.pinned, post.views,
            [a.to_dict() for a in post.attachments],
            permission.level.value if permission else None,
            permission.allowed_departments if permission else [],
            post.created_at
        )
        return self._row_to_post(row)

    async def get_by_id(self, post_id: int) -> Optional[Post]:
        """Get post by ID"""
        query = "SELECT * FROM posts WHERE id = $1"
        row = await self.fetchrow(query, post_id)
        return self._row_to_post(row) if row else None

    async def list_all(self, category: Optional[str] = None) -> List[Post]:
        """List posts, pinned first then newest first"""
        if category:
            query = """
                SELECT * FROM posts
                WHERE category = $1
                ORDER BY pinned DESC, created_at DESC
            """
            rows = await self.fetch(query, category)
        else:
            query = "SELECT * FROM posts ORDER BY pinned DESC, created_at DESC"
            rows = await self.fetch(query)
        return [self._row_to_post(row) for row in rows]

    def _row_to_post(self, row) -> Post:
        """Convert database row to Post"""
        attachments = row["attachments"] or []

        permission = None
        if row["permission_read"]:
            try:
                level = PermissionLevel(row["permission_read"])
            except ValueError:
                level = None
            permission = PostPermission(
                level=level,
                allowed_departments=list(row["allowed_departments"] or []),
            )

        return Post(
            id=row["id"],
            title=row["title"],
            content=row["content"] or "",
            author_id=row["author_id"],
            author_name=row["author"],
            department=row["department"],
            category=row["category"],
            pinned=row["pinned"],
            views=row["views"],
            attachments=normalize_attachments(attachments),
            permission=permission,
            created_at=row["created_at"],
        )
