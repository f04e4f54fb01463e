"""Comment endpoints for the Fan Archive API."""

from __future__ import annotations

from fastapi import APIRouter, status

from fan_archive.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from fan_archive.models import Comment
from fan_archive.repositories import CommentRepository
from fan_archive.schemas.comment import CommentCreate, CommentResponse

from .fanworks import get_visible_fanwork_or_404

router = APIRouter(prefix="/fanworks", tags=["comments"])


@router.get("/{fanwork_id}/comments", response_model=list[CommentResponse])
def list_comments(fanwork_id: int, db: SessionDep, viewer: OptionalUserDep) -> list[Comment]:
    """Return a fanwork's comments, oldest first."""
    get_visible_fanwork_or_404(db, fanwork_id, viewer)
    return CommentRepository(db).list_for_fanwork(fanwork_id)


@router.post(
    "/{fanwork_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    fanwork_id: int,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    """Post a comment on a fanwork as the current user."""
    get_visible_fanwork_or_404(db, fanwork_id, current_user)
    return CommentRepository(db).create(
        fanwork_id=fanwork_id,
        user_id=current_user.id,
        content=payload.content,
    )
