"""Report and moderation Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from fan_archive.models.report import ReportStatus, ReportTargetType

from .common import ApiModel


class ReportCreate(ApiModel):
    """Schema for filing a report."""

    target_type: ReportTargetType
    target_id: str = Field(..., min_length=1, max_length=64)
    reason: str = Field(..., min_length=1, max_length=255)
    details: str | None = Field(None, max_length=5000)

    @field_validator("target_id", mode="before")
    @classmethod
    def coerce_target_id(cls, v: Any) -> Any:
        # Fanwork and comment ids are integers; user ids are strings.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ReportUpdate(ApiModel):
    """Schema for a moderator's review of a report."""

    status: ReportStatus | None = None
    moderation_action: str | None = Field(None, max_length=2000)


class ReportResponse(ApiModel):
    """Schema for report information returned by the API."""

    id: int
    reporter_id: str
    target_type: ReportTargetType
    target_id: str
    reason: str
    details: str | None = None
    status: ReportStatus
    moderation_action: str | None = None
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    created_at: datetime


class BanRequest(ApiModel):
    """Reason recorded when banning an account."""

    reason: str | None = Field(None, max_length=2000)


class RoleUpdateRequest(ApiModel):
    """Requested role for an account; checked against the known roles by the handler."""

    role: str
