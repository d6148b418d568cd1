"""
Post Model

Represents a published post and its read permission.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class PermissionLevel(str, Enum):
    """Read permission level (closed set, values are the wire strings)"""
    ALL = "전체"
    MANAGER_UP = "부장 이상"
    DEPARTMENT = "특정 부서"
    AUTHOR_ONLY = "작성자만"


CATEGORIES = ["공지", "일반", "회의록"]


@dataclass
class PostPermission:
    """
    Read permission of a post.

    level is None when the stored value is not a recognized level;
    such permissions deny every non-author.
    """
    level: Optional[PermissionLevel] = PermissionLevel.ALL
    allowed_departments: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to wire shape"""
        return {
            "read": self.level.value if self.level else None,
            "allowedDepartments": list(self.allowed_departments),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["PostPermission"]:
        """Create from wire shape, None when no permission was set"""
        if not data:
            return None
        try:
            level = PermissionLevel(data.get("read"))
        except ValueError:
            level = None
        return cls(
            level=level,
            allowed_departments=list(data.get("allowedDepartments") or []),
        )


@dataclass
class Attachment:
    """File reference attached to a post"""
    name: str = ""
    data: Optional[str] = None                # base64 encoded file data

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        result = {"name": self.name}
        if self.data is not None:
            result["data"] = self.data
        return result


def normalize_attachments(raw) -> List[Attachment]:
    """
    Normalize stored attachments into Attachment objects.

    Older posts store bare file names, newer ones store {name, data}.
    """
    attachments = []
    for item in raw or []:
        if isinstance(item, Attachment):
            attachments.append(item)
        elif isinstance(item, str):
            attachments.append(Attachment(name=item))
        elif isinstance(item, dict) and item.get("name"):
            attachments.append(Attachment(name=item["name"], data=item.get("data")))
    return attachments


@dataclass
class Post:
    """
    Post entity (content item).

    A missing permission is equivalent to PermissionLevel.ALL.
    """
    id: int = 0
    title: str = ""
    content: str = ""
    author_id: int = 0
    author_name: str = ""
    department: str = ""
    category: str = "일반"
    pinned: bool = False
    views: int = 0
    attachments: List[Attachment] = field(default_factory=list)
    permission: Optional[PostPermission] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response"""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "authorId": self.author_id,
            "author": self.author_name,
            "department": self.department,
            "category": self.category,
            "pinned": self.pinned,
            "views": self.views,
            "attachments": [a.to_dict() for a in self.attachments],
            "permission": self.permission.to_dict() if self.permission else None,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Post":
        """Create from dictionary"""
        return cls(
            id=int(data.get("id", 0)),
            title=data.get("title", ""),
            content=data.get("content") or "",
            author_id=int(data.get("authorId", 0)),
            author_name=data.get("author", ""),
            department=data.get("department", ""),
            category=data.get("category", "일반"),
            pinned=data.get("pinned", False),
            views=data.get("views", 0),
            attachments=normalize_attachments(data.get("attachments")),
            permission=PostPermission.from_dict(data.get("permission")),
            created_at=datetime.fromisoformat(data["createdAt"]) if isinstance(data.get("createdAt"), str) else data.get("createdAt", datetime.utcnow()),
        )
