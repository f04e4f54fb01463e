"""SQLAlchemy models for the Fan Archive application."""

from .comment import Comment
from .fanwork import ContentRating, Fanwork, FanworkType, Tag, fanwork_tag
from .interaction import Bookmark, Like
from .report import Report, ReportStatus, ReportTargetType
from .user import User, UserRole

__all__ = [
    "Bookmark", "Like",
    "Comment",
    "ContentRating", "Fanwork", "FanworkType", "Tag", "fanwork_tag",
    "Report", "ReportStatus", "ReportTargetType",
    "User", "UserRole",
]
