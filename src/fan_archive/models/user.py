"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fan_archive.db.session import Base
from fan_archive.db.time import utcnow

if TYPE_CHECKING:
    from .fanwork import Fanwork


class UserRole(StrEnum):
    """Account roles, ordered from least to most privileged."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]


_ROLE_RANK = {UserRole.USER: 0, UserRole.MODERATOR: 1, UserRole.ADMIN: 2}


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """A registered account with credentials, role and moderation status."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_user_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.USER.value)

    is_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ban_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    banned_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    banned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    age_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    age_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    fanworks: Mapped[list[Fanwork]] = relationship("Fanwork", back_populates="author")

    @property
    def user_role(self) -> UserRole:
        """Return the role as an enum, treating unknown values as plain users."""
        try:
            return UserRole(self.role)
        except ValueError:
            return UserRole.USER

    def has_role(self, minimum: UserRole) -> bool:
        """Return True if this account's role is at least `minimum`."""
        return self.user_role.rank >= minimum.rank

    @property
    def is_moderator(self) -> bool:
        return self.has_role(UserRole.MODERATOR)
