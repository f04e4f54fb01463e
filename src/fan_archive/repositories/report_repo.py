"""Data access helpers for reports."""
from __future__ import annotations

from sqlalchemy.orm import Session

from fan_archive.db.time import utcnow
from fan_archive.models.report import Report, ReportStatus, ReportTargetType

__all__ = ["ReportRepository"]


class ReportRepository:
    """Thin wrapper around database access for report entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, report_id: int) -> Report | None:
        return self.session.get(Report, report_id)

    def find(self, status: ReportStatus | None = None) -> list[Report]:
        """Return reports, newest first, optionally restricted to one status."""
        query = self.session.query(Report)
        if status is not None:
            query = query.filter(Report.status == status.value)
        return query.order_by(Report.created_at.desc(), Report.id.desc()).all()

    def create(
        self,
        *,
        reporter_id: str,
        target_type: ReportTargetType,
        target_id: str,
        reason: str,
        details: str | None = None,
    ) -> Report:
        report = Report(
            reporter_id=reporter_id,
            target_type=target_type.value,
            target_id=target_id,
            reason=reason,
            details=details,
            status=ReportStatus.PENDING.value,
        )
        self.session.add(report)
        self.session.commit()
        self.session.refresh(report)
        return report

    def review(
        self,
        report: Report,
        *,
        reviewer_id: str,
        status: ReportStatus | None = None,
        moderation_action: str | None = None,
    ) -> Report:
        """Record a moderator's review; fields left as None keep their value."""
        if status is not None:
            report.status = status.value
        if moderation_action is not None:
            report.moderation_action = moderation_action
        report.reviewed_by = reviewer_id
        report.reviewed_at = utcnow()
        self.session.commit()
        self.session.refresh(report)
        return report
