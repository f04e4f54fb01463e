"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from .common import ApiModel
from .user import UserSummary


class CommentCreate(ApiModel):
    """Schema for posting a comment."""

    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty")
        return v


class CommentResponse(ApiModel):
    """Schema for comment information returned by the API."""

    id: int
    fanwork_id: int
    user_id: str
    content: str
    created_at: datetime
    author: UserSummary | None = None
