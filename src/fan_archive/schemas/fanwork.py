"""Fanwork-related Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field, HttpUrl, field_validator, model_validator

from fan_archive.models.fanwork import ContentRating, FanworkType

from .common import ApiModel
from .user import UserSummary


def split_tags(value: Any) -> list[str]:
    """Accept a list of tags, a comma-separated string, or a mix of both."""
    if value is None:
        return []
    items = [value] if isinstance(value, str) else list(value)
    tags: list[str] = []
    for item in items:
        tags.extend(part for part in str(item).split(","))
    return tags


class FanworkCreate(ApiModel):
    """Schema for creating a fanwork from the upload form."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=10_000)
    type: FanworkType
    rating: ContentRating
    content: str | None = None
    word_count: int | None = Field(None, ge=0)
    chapter_count: int | None = Field(None, ge=1)
    is_complete: bool = False
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data: Any) -> Any:
        # HTML forms send empty strings for untouched optional inputs.
        if isinstance(data, dict):
            return {key: (None if value == "" else value) for key, value in data.items()}
        return data

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v: Any) -> list[str]:
        return split_tags(v)

    @field_validator("is_complete", mode="before")
    @classmethod
    def default_is_complete(cls, v: Any) -> Any:
        return False if v is None else v


class FanworkResponse(ApiModel):
    """Schema for fanwork information returned by the API."""

    id: int
    author_id: str
    type: FanworkType
    rating: ContentRating
    title: str
    description: str | None = None
    content: str | None = None
    content_url: str | None = None
    word_count: int | None = None
    chapter_count: int | None = None
    is_complete: bool = False
    ao3_work_id: str | None = None
    ao3_url: str | None = None
    imported_at: datetime | None = None
    is_hidden: bool = False
    moderation_reason: str | None = None
    moderated_by: str | None = None
    moderated_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    author: UserSummary | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_names(cls, v: Any) -> list[str]:
        if v is None:
            return []
        return [getattr(tag, "name", tag) for tag in v]


class AO3ImportRequest(ApiModel):
    """Request to register an AO3 work in the archive."""

    ao3_url: HttpUrl
    title: str | None = Field(None, max_length=255)
    description: str | None = None


class AO3PreviewRequest(ApiModel):
    """Story text pasted by the user for a manual AO3 import."""

    content: str = Field(..., max_length=2_000_000)


class AO3Preview(ApiModel):
    """Fields extracted from pasted text, ready to prefill the upload form."""

    title: str
    content: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    rating: ContentRating = ContentRating.ALL_AGES
    word_count: int
    chapter_count: int = 1


class FanworkCounts(ApiModel):
    """Engagement totals for a fanwork plus the viewer's own state."""

    likes: int
    comments: int
    bookmarks: int
    is_liked: bool = False
    is_bookmarked: bool = False


class LikeToggleResponse(ApiModel):
    is_liked: bool


class BookmarkToggleResponse(ApiModel):
    is_bookmarked: bool


class HideRequest(ApiModel):
    """Reason recorded when a moderator hides a fanwork."""

    reason: str | None = Field(None, max_length=2000)
