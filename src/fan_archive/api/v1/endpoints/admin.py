"""Moderation endpoints: report review, account bans, roles and fanwork visibility."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Query, Response, status
from sqlalchemy.orm import Session

from fan_archive.api.v1.dependencies import AdminDep, MediaStoreDep, ModeratorDep, SessionDep
from fan_archive.core.errors import ForbiddenError, NotFoundError, ValidationFailedError
from fan_archive.models import Fanwork, Report, ReportStatus, User, UserRole
from fan_archive.repositories import FanworkRepository, ReportRepository, UserRepository
from fan_archive.schemas.fanwork import FanworkResponse, HideRequest
from fan_archive.schemas.report import (
    BanRequest,
    ReportResponse,
    ReportUpdate,
    RoleUpdateRequest,
)
from fan_archive.schemas.user import UserAdminView

from .fanworks import get_fanwork_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["moderation"])


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.get("/reports", response_model=list[ReportResponse])
def list_reports(
    moderator: ModeratorDep,
    db: SessionDep,
    report_status: Annotated[ReportStatus | None, Query(alias="status")] = None,
) -> list[Report]:
    """List reports, newest first, optionally filtered by status."""
    return ReportRepository(db).find(report_status)


@router.patch("/reports/{report_id}", response_model=ReportResponse)
def update_report(
    report_id: int,
    payload: ReportUpdate,
    moderator: ModeratorDep,
    db: SessionDep,
) -> Report:
    """Record a review outcome on a report."""
    reports = ReportRepository(db)
    report = reports.get(report_id)
    if report is None:
        raise NotFoundError("Report not found")
    report = reports.review(
        report,
        reviewer_id=moderator.id,
        status=payload.status,
        moderation_action=payload.moderation_action,
    )
    logger.info("Moderator %s reviewed report %s (%s)", moderator.id, report.id, report.status)
    return report


@router.post("/users/{user_id}/ban", response_model=UserAdminView)
def ban_user(
    user_id: str,
    moderator: ModeratorDep,
    db: SessionDep,
    payload: BanRequest | None = None,
) -> User:
    """Ban an account. Moderators may only ban accounts ranked below them."""
    target = _get_user_or_404(db, user_id)
    if target.id == moderator.id:
        raise ForbiddenError("You cannot ban yourself")
    if target.user_role.rank >= moderator.user_role.rank:
        raise ForbiddenError("Cannot ban a user with equal or higher role")

    reason = payload.reason if payload else None
    user = UserRepository(db).ban(target, reason=reason, banned_by=moderator.id)
    logger.info("Moderator %s banned user %s", moderator.id, user.id)
    return user


@router.post("/users/{user_id}/unban", response_model=UserAdminView)
def unban_user(user_id: str, moderator: ModeratorDep, db: SessionDep) -> User:
    """Lift a ban and clear its recorded details."""
    user = UserRepository(db).unban(_get_user_or_404(db, user_id))
    logger.info("Moderator %s unbanned user %s", moderator.id, user.id)
    return user


@router.patch("/users/{user_id}/role", response_model=UserAdminView)
def update_user_role(
    user_id: str,
    payload: RoleUpdateRequest,
    admin: AdminDep,
    db: SessionDep,
) -> User:
    """Change an account's role."""
    try:
        role = UserRole(payload.role)
    except ValueError as err:
        raise ValidationFailedError(message="Invalid role") from err

    target = _get_user_or_404(db, user_id)
    if target.id == admin.id:
        raise ForbiddenError("You cannot change your own role")

    user = UserRepository(db).set_role(target, role)
    logger.info("Admin %s set role of user %s to %s", admin.id, user.id, role)
    return user


@router.patch("/fanworks/{fanwork_id}/hide", response_model=FanworkResponse)
def hide_fanwork(
    fanwork_id: int,
    moderator: ModeratorDep,
    db: SessionDep,
    payload: HideRequest | None = None,
) -> Fanwork:
    """Remove a fanwork from the public catalog without deleting it."""
    fanwork = get_fanwork_or_404(db, fanwork_id)
    reason = payload.reason if payload else None
    fanwork = FanworkRepository(db).hide(fanwork, reason=reason, moderator_id=moderator.id)
    logger.info("Moderator %s hid fanwork %s", moderator.id, fanwork.id)
    return fanwork


@router.patch("/fanworks/{fanwork_id}/unhide", response_model=FanworkResponse)
def unhide_fanwork(fanwork_id: int, moderator: ModeratorDep, db: SessionDep) -> Fanwork:
    """Restore a hidden fanwork and clear its moderation details."""
    fanwork = FanworkRepository(db).unhide(get_fanwork_or_404(db, fanwork_id))
    logger.info("Moderator %s unhid fanwork %s", moderator.id, fanwork.id)
    return fanwork


@router.delete("/fanworks/{fanwork_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fanwork(
    fanwork_id: int,
    moderator: ModeratorDep,
    db: SessionDep,
    media: MediaStoreDep,
) -> Response:
    """Delete a fanwork with its comments, likes and bookmarks, and its stored file."""
    fanwork = get_fanwork_or_404(db, fanwork_id)
    content_url = fanwork.content_url
    FanworkRepository(db).delete(fanwork)
    media.delete(content_url)
    logger.info("Moderator %s deleted fanwork %s", moderator.id, fanwork_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
