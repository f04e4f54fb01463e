"""SQLAlchemy model for comments on fanworks."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fan_archive.db.session import Base
from fan_archive.db.time import utcnow

if TYPE_CHECKING:
    from .fanwork import Fanwork
    from .user import User


class Comment(Base):
    """A reader's comment. Comments are never edited once posted."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fanwork_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("fanworks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    fanwork: Mapped[Fanwork] = relationship("Fanwork", back_populates="comments")
    author: Mapped[User] = relationship("User")
