"""Endpoint for filing content reports."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from fan_archive.api.v1.dependencies import CurrentUserDep, SessionDep
from fan_archive.models import Report
from fan_archive.repositories import ReportRepository
from fan_archive.schemas.report import ReportCreate, ReportResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(payload: ReportCreate, current_user: CurrentUserDep, db: SessionDep) -> Report:
    """File a report against a fanwork, comment or account."""
    report = ReportRepository(db).create(
        reporter_id=current_user.id,
        target_type=payload.target_type,
        target_id=payload.target_id,
        reason=payload.reason,
        details=payload.details,
    )
    logger.info(
        "User %s reported %s %s", current_user.id, report.target_type, report.target_id
    )
    return report
