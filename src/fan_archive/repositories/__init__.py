"""Persistence layer: one repository per aggregate."""

from .comment_repo import CommentRepository
from .fanwork_repo import FanworkFilters, FanworkRepository
from .interaction_repo import InteractionRepository
from .report_repo import ReportRepository
from .tag_repo import TagRepository, normalize_tag_names
from .user_repo import UserRepository

__all__ = [
    "CommentRepository",
    "FanworkFilters", "FanworkRepository",
    "InteractionRepository",
    "ReportRepository",
    "TagRepository", "normalize_tag_names",
    "UserRepository",
]
