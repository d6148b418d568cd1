"""
Member Storage

PostgreSQL storage for the member roster (read side used by the pipeline).
"""
import logging
from typing import Optional, List

from .base import BaseStorage
from ..models.member import Member, parse_role

logger = logging.getLogger("byte.storage.member")


class MemberStorage(BaseStorage):
    """Storage for Member entities"""

    async def get_by_id(self, member_id: int) -> Optional[Member]:
        """Get member by ID"""
        query = "SELECT * FROM users WHERE id = $1"
        row = await self.fetchrow(query, member_id)
        return self._row_to_member(row) if row else None

    async def list_roster(self) -> List[Member]:
        """List active, approved members"""
        query = """
            SELECT * FROM users
            WHERE active = true AND approved = true
            ORDER BY id
        """
        rows = await self.fetch(query)
        return [self._row_to_member(row) for row in rows]

    def _row_to_member(self, row) -> Member:
        """Convert database row to Member"""
        return Member(
            id=row["id"],
            name=row["name"],
            email=row["email"] or "",
            student_id=row["student_id"] or "",
            department=row["department"] or "",
            role=parse_role(row["role"]),
            phone=row["phone"] or "",
            active=row["active"],
            approved=row.get("approved", True),
            # Column added later; older rows default to opted in
            email_notification_enabled=row.get("email_notification_enabled", True) is not False,
            created_at=row["created_at"],
        )
