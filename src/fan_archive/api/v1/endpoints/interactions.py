"""Like, bookmark and engagement-count endpoints for fanworks."""

from __future__ import annotations

from fastapi import APIRouter

from fan_archive.api.v1.dependencies import CurrentUserDep, OptionalUserDep, SessionDep
from fan_archive.repositories import FanworkRepository, InteractionRepository
from fan_archive.schemas.fanwork import BookmarkToggleResponse, FanworkCounts, LikeToggleResponse

from .fanworks import get_visible_fanwork_or_404

router = APIRouter(prefix="/fanworks", tags=["interactions"])


@router.post("/{fanwork_id}/like", response_model=LikeToggleResponse)
def toggle_like(
    fanwork_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> LikeToggleResponse:
    """Like the fanwork, or remove an existing like."""
    get_visible_fanwork_or_404(db, fanwork_id, current_user)
    is_liked = InteractionRepository(db).toggle_like(current_user.id, fanwork_id)
    return LikeToggleResponse(is_liked=is_liked)


@router.post("/{fanwork_id}/bookmark", response_model=BookmarkToggleResponse)
def toggle_bookmark(
    fanwork_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> BookmarkToggleResponse:
    """Bookmark the fanwork, or remove an existing bookmark."""
    get_visible_fanwork_or_404(db, fanwork_id, current_user)
    is_bookmarked = InteractionRepository(db).toggle_bookmark(current_user.id, fanwork_id)
    return BookmarkToggleResponse(is_bookmarked=is_bookmarked)


@router.get("/{fanwork_id}/counts", response_model=FanworkCounts)
def get_counts(fanwork_id: int, db: SessionDep, viewer: OptionalUserDep) -> FanworkCounts:
    """Return like, comment and bookmark totals plus the viewer's own state."""
    get_visible_fanwork_or_404(db, fanwork_id, viewer)
    totals = FanworkRepository(db).counts(fanwork_id)
    if viewer is None:
        return FanworkCounts(**totals)

    interactions = InteractionRepository(db)
    return FanworkCounts(
        **totals,
        is_liked=interactions.is_liked(viewer.id, fanwork_id),
        is_bookmarked=interactions.is_bookmarked(viewer.id, fanwork_id),
    )
