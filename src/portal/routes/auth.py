"""
Authentication Helpers

JWT bearer token handling for route dependencies.
Login, signup and password handling live outside this service.
"""
import jwt
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import HTTPException, Header

from ..config import Config
from ..models.member import Member
from ..services.engine_service import get_engine_service

logger = logging.getLogger("byte.routes.auth")


def create_token(member_id: int, name: str = None) -> str:
    """Create JWT token for member"""
    expiration = datetime.now(timezone.utc) + timedelta(hours=Config.JWT_EXPIRATION_HOURS)
    payload = {
        "user_id": member_id,
        "name": name,
        "exp": expiration
    }
    return jwt.encode(payload, Config.JWT_SECRET, algorithm=Config.JWT_ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    """Verify and decode JWT token"""
    try:
        return jwt.decode(token, Config.JWT_SECRET, algorithms=[Config.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


async def get_current_user(authorization: str = Header(None)) -> Member:
    """Dependency to get the current authenticated member"""
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header required")

    # Expect "Bearer <token>"
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    payload = verify_token(parts[1])
    if not payload or not isinstance(payload.get("user_id"), int):
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    engine = get_engine_service()
    member = await engine.member_storage.get_by_id(payload["user_id"])
    if not member or not member.active or not member.approved:
        raise HTTPException(status_code=401, detail="Account is not active")

    return member
