"""Models capturing reader interactions (likes and bookmarks) on fanworks."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fan_archive.db.session import Base
from fan_archive.db.time import utcnow


class Like(Base):
    """Presence of a row means the user likes the fanwork."""

    __tablename__ = "likes"

    # Composite primary key prevents duplicate likes from the same user.
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        primary_key=True,
    )
    fanwork_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("fanworks.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Bookmark(Base):
    """Presence of a row means the user bookmarked the fanwork."""

    __tablename__ = "bookmarks"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        primary_key=True,
    )
    fanwork_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("fanworks.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
