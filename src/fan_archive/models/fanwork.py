"""SQLAlchemy models for fanworks and their tags."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fan_archive.db.session import Base
from fan_archive.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment
    from .interaction import Bookmark, Like
    from .user import User


class FanworkType(StrEnum):
    ARTWORK = "artwork"
    FANFICTION = "fanfiction"
    COMIC = "comic"


class ContentRating(StrEnum):
    ALL_AGES = "all-ages"
    TEEN = "teen"
    MATURE = "mature"
    EXPLICIT = "explicit"


# Join table; the composite primary key keeps each tag attached at most once.
fanwork_tag = Table(
    "fanwork_tag",
    Base.metadata,
    Column(
        "fanwork_id",
        Integer,
        ForeignKey("fanworks.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Tag(Base):
    """A free-form label; names are stored trimmed and lower-cased."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    fanworks: Mapped[list[Fanwork]] = relationship(
        "Fanwork", secondary=fanwork_tag, back_populates="tags"
    )


class Fanwork(Base):
    """A user-submitted creative work.

    Content is either inline text (`content`), an uploaded file (`content_url`),
    or a pointer to an AO3 work for imported entries. Moderators can hide a
    work, which removes it from the public catalog without deleting it.
    """

    __tablename__ = "fanworks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    rating: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    content_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    word_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    chapter_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # AO3 import metadata
    ao3_work_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    ao3_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    imported_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Moderation
    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    moderation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    moderated_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    author: Mapped[User] = relationship("User", back_populates="fanworks")
    tags: Mapped[list[Tag]] = relationship(
        "Tag", secondary=fanwork_tag, back_populates="fanworks", order_by="Tag.name"
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment", back_populates="fanwork", cascade="all, delete-orphan"
    )
    likes: Mapped[list[Like]] = relationship("Like", cascade="all, delete-orphan")
    bookmarks: Mapped[list[Bookmark]] = relationship("Bookmark", cascade="all, delete-orphan")
