"""
Post Routes

Endpoints for publishing and reading posts.
"""
import logging
from typing import Optional, List, Union

from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field

from ..models.member import Member
from ..models.post import PostPermission
from ..services.access_service import can_edit, can_read
from ..services.engine_service import get_engine_service
from .auth import get_current_user

logger = logging.getLogger("byte.routes.posts")
router = APIRouter(prefix="/posts", tags=["posts"])


# ============================================
# Request/Response Models
# ============================================

class PermissionModel(BaseModel):
    """Read permission wire shape"""
    read: str = "전체"                               # '전체' | '부장 이상' | '특정 부서' | '작성자만'
    allowedDepartments: List[str] = Field(default_factory=list)


class AttachmentModel(BaseModel):
    name: str
    data: Optional[str] = None


class CreatePostRequest(BaseModel):
    """Create post request"""
    title: str
    content: str = ""
    category: str = "일반"
    department: Optional[str] = None
    pinned: bool = False
    attachments: List[Union[str, AttachmentModel]] = Field(default_factory=list)
    permission: Optional[PermissionModel] = None


class DispatchSummary(BaseModel):
    notified: List[int]
    failed: List[int]
    emails_scheduled: int


class CreatePostResponse(BaseModel):
    post: dict
    notifications: DispatchSummary
    message: str


# ============================================
# Routes
# ============================================

@router.post("", response_model=CreatePostResponse, status_code=201)
async def create_post(
    request: CreatePostRequest,
    current_user: Member = Depends(get_current_user),
):
    """Publish a post and notify mentioned / department members"""
    engine = get_engine_service()

    permission = None
    if request.permission is not None:
        permission = PostPermission.from_dict(request.permission.model_dump())
        if permission.level is None:
            raise HTTPException(status_code=400, detail=f"Unknown permission level: {request.permission.read}")

    attachments = [
        a if isinstance(a, str) else a.model_dump(exclude_none=True)
        for a in request.attachments
    ]

    try:
        post, report = await engine.post_service.publish(
            author=current_user,
            title=request.title,
            content=request.content,
            category=request.category,
            department=request.department,
            pinned=request.pinned,
            attachments=attachments,
            permission=permission,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CreatePostResponse(
        post=post.to_dict(),
        notifications=DispatchSummary(**report.to_dict()),
        message="게시글이 작성되었습니다.",
    )


@router.get("")
async def list_posts(
    category: Optional[str] = None,
    search: Optional[str] = None,
    current_user: Member = Depends(get_current_user),
):
    """List posts readable by the current member, optionally filtered by title/author"""
    engine = get_engine_service()
    posts = await engine.post_service.list_posts(current_user, category, search)
    return {"posts": [p.to_dict() for p in posts]}


@router.get("/{post_id}")
async def get_post(
    post_id: int,
    current_user: Member = Depends(get_current_user),
):
    """Get a post the current member may read"""
    engine = get_engine_service()
    post = await engine.post_service.get_post(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    if not can_read(current_user, post):
        raise HTTPException(status_code=403, detail="You do not have permission to read this post")

    result = post.to_dict()
    result["canEdit"] = can_edit(current_user, post)
    return {"post": result}
