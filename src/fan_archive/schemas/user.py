"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from fan_archive.models.user import UserRole

from .common import ApiModel


class RegisterRequest(ApiModel):
    """Schema for account registration."""

    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        return v


class LoginRequest(ApiModel):
    """Schema for login submissions."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserSummary(ApiModel):
    """Public view of an account, embedded in fanworks and comments."""

    id: str
    username: str
    first_name: str | None = None
    last_name: str | None = None


class AuthUser(ApiModel):
    """Account fields returned alongside a freshly issued token."""

    id: str
    email: str
    username: str
    role: UserRole


class AuthResponse(ApiModel):
    """Response returned after successful registration or login."""

    user: AuthUser
    token: str = Field(..., description="JWT bearer token")


class UserProfile(ApiModel):
    """The authenticated user's own profile."""

    id: str
    email: str
    username: str
    role: UserRole
    age_verified: bool
    created_at: datetime
    first_name: str | None = None
    last_name: str | None = None


class UserAdminView(UserProfile):
    """Account view returned by moderation endpoints."""

    is_banned: bool
    ban_reason: str | None = None
    banned_by: str | None = None
    banned_at: datetime | None = None


class AgeVerificationRequest(ApiModel):
    """Self-declaration that the user is of age for mature content."""

    confirmed: bool = False
