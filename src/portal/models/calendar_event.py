"""
Calendar Event Model

Represents a calendar entry. Period events span from date to end_date
(inclusive) and may be restricted to a set of departments.
"""
from dataclasses import dataclass, field
from datetime import date as Date, datetime
from typing import List, Optional
from uuid import uuid4


def _parse_date(value) -> Optional[Date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, Date):
        return value
    return Date.fromisoformat(value)


@dataclass
class CalendarEvent:
    """
    Calendar event entity.

    - date: first day (YYYY-MM-DD on the wire)
    - end_date: last day for period events, None for single-day events
    - allowed_departments: empty means visible to everyone
    """
    id: str = field(default_factory=lambda: str(uuid4()))
    title: str = ""
    description: Optional[str] = None
    date: Optional[Date] = None
    end_date: Optional[Date] = None
    start_time: str = ""                                 # HH:mm
    end_time: Optional[str] = None
    location: Optional[str] = None
    category: str = "기타"
    color: str = "#1d1d1f"
    post_id: Optional[int] = None
    no_time: bool = False
    is_period: bool = False
    created_by: Optional[str] = None
    allowed_departments: List[str] = field(default_factory=list)

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
            "category": self.category,
            "color": self.color,
            "postId": self.post_id,
            "noTime": self.no_time,
            "isPeriod": self.is_period,
            "createdBy": self.created_by,
            "allowedDepartments": list(self.allowed_departments),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CalendarEvent":
        """Create from wire shape; raises ValueError on unparseable dates"""
        return cls(
            id=str(data["id"]) if data.get("id") is not None else str(uuid4()),
            title=data.get("title", ""),
            description=data.get("description"),
            date=_parse_date(data.get("date")),
            end_date=_parse_date(data.get("endDate")),
            start_time=data.get("startTime") or "",
            end_time=data.get("endTime"),
            location=data.get("location"),
            category=data.get("category") or "기타",
            color=data.get("color") or "#1d1d1f",
            post_id=data.get("postId"),
            no_time=data.get("noTime", False),
            is_period=data.get("isPeriod", False),
            created_by=data.get("createdBy"),
            allowed_departments=list(data.get("allowedDepartments") or []),
        )
