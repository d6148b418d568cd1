"""
Member Model

Represents a member of the organization roster.
Members belong to a department and hold one of the ranked organizational roles.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Organizational role (closed set)"""
    PRESIDENT = "회장"
    VICE_PRESIDENT = "부회장"
    MANAGER = "부장"
    MEMBER = "부원"


# Total order used for "manager or above" style checks only
ROLE_RANK = {
    Role.PRESIDENT: 4,
    Role.VICE_PRESIDENT: 3,
    Role.MANAGER: 2,
    Role.MEMBER: 1,
}


def role_rank(role: Optional[Role]) -> int:
    """Rank of a role; unknown or missing roles rank below every known role"""
    return ROLE_RANK.get(role, 0)


def parse_role(value) -> Optional[Role]:
    """Map a stored role string onto Role, None when it is not one of the known roles"""
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError:
        return None


@dataclass
class Member:
    """
    Member entity (an identity on the roster).

    - id: numeric identity id, also embedded in mention markers
    - department: used by department-scoped visibility and broadcasts
    - role: ranked organizational role
    - email_notification_enabled: opt-in for department broadcast emails
    """
    id: int = 0
    name: str = ""
    email: str = ""
    student_id: str = ""
    department: str = ""
    role: Optional[Role] = Role.MEMBER
    phone: str = ""
    active: bool = True
    approved: bool = True
    email_notification_enabled: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response"""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "studentId": self.student_id,
            "department": self.department,
            "role": self.role.value if self.role else None,
            "phone": self.phone,
            "active": self.active,
            "approved": self.approved,
            "emailNotificationEnabled": self.email_notification_enabled,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Member":
        """Create from dictionary"""
        return cls(
            id=int(data.get("id", 0)),
            name=data.get("name", ""),
            email=data.get("email") or "",
            student_id=data.get("studentId", ""),
            department=data.get("department") or "",
            role=parse_role(data.get("role")),
            phone=data.get("phone", ""),
            active=data.get("active", True),
            approved=data.get("approved", True),
            email_notification_enabled=data.get("emailNotificationEnabled", True),
            created_at=datetime.fromisoformat(data["createdAt"]) if isinstance(data.get("createdAt"), str) else data.get("createdAt", datetime.utcnow()),
        )
