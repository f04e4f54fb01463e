"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse
from .fanwork import (
    AO3ImportRequest,
    AO3Preview,
    AO3PreviewRequest,
    BookmarkToggleResponse,
    FanworkCounts,
    FanworkCreate,
    FanworkResponse,
    HideRequest,
    LikeToggleResponse,
)
from .report import BanRequest, ReportCreate, ReportResponse, ReportUpdate, RoleUpdateRequest
from .tag import TagResponse
from .user import (
    AgeVerificationRequest,
    AuthResponse,
    AuthUser,
    LoginRequest,
    RegisterRequest,
    UserAdminView,
    UserProfile,
    UserSummary,
)

__all__ = [
    "CommentCreate", "CommentResponse",
    "AO3ImportRequest", "AO3Preview", "AO3PreviewRequest",
    "BookmarkToggleResponse", "FanworkCounts", "FanworkCreate", "FanworkResponse",
    "HideRequest", "LikeToggleResponse",
    "BanRequest", "ReportCreate", "ReportResponse", "ReportUpdate", "RoleUpdateRequest",
    "TagResponse",
    "AgeVerificationRequest", "AuthResponse", "AuthUser", "LoginRequest", "RegisterRequest",
    "UserAdminView", "UserProfile", "UserSummary",
]
