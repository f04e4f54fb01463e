"""Data access helpers for working with fanworks."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session, selectinload

from fan_archive.db.time import utcnow
from fan_archive.models.comment import Comment
from fan_archive.models.fanwork import Fanwork, Tag
from fan_archive.models.interaction import Bookmark, Like

from .tag_repo import TagRepository, normalize_tag_names

__all__ = ["FanworkFilters", "FanworkRepository"]


@dataclass
class FanworkFilters:
    """Catalog filters; empty sequences mean "no constraint"."""

    types: Sequence[str] = field(default_factory=list)
    ratings: Sequence[str] = field(default_factory=list)
    tags: Sequence[str] = field(default_factory=list)
    search: str | None = None
    author_id: str | None = None
    include_hidden: bool = False
    limit: int = 20
    offset: int = 0


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class FanworkRepository:
    """Thin wrapper around database access for fanwork entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _base_query(self) -> Query[Fanwork]:
        return self.session.query(Fanwork).options(
            selectinload(Fanwork.author),
            selectinload(Fanwork.tags),
        )

    def get(self, fanwork_id: int) -> Fanwork | None:
        """Return a fanwork by identifier, hidden or not."""
        return self._base_query().filter(Fanwork.id == fanwork_id).first()

    def find(self, filters: FanworkFilters) -> list[Fanwork]:
        """Return fanworks matching `filters`, newest first.

        Tag filtering matches works carrying any of the requested tags. A tag
        list that normalizes to nothing applies no constraint.
        """
        query = self._base_query()

        if not filters.include_hidden:
            query = query.filter(Fanwork.is_hidden.is_(False))
        if filters.types:
            query = query.filter(Fanwork.type.in_(list(filters.types)))
        if filters.ratings:
            query = query.filter(Fanwork.rating.in_(list(filters.ratings)))

        tag_names = normalize_tag_names(filters.tags)
        if tag_names:
            query = query.filter(Fanwork.tags.any(Tag.name.in_(tag_names)))

        if filters.search and filters.search.strip():
            pattern = f"%{_escape_like(filters.search.strip())}%"
            query = query.filter(
                or_(
                    Fanwork.title.ilike(pattern, escape="\\"),
                    Fanwork.description.ilike(pattern, escape="\\"),
                )
            )
        if filters.author_id:
            query = query.filter(Fanwork.author_id == filters.author_id)

        return (
            query.order_by(Fanwork.created_at.desc(), Fanwork.id.desc())
            .offset(filters.offset)
            .limit(filters.limit)
            .all()
        )

    def create(self, *, author_id: str, **fields: Any) -> Fanwork:
        """Insert a new fanwork and return the persisted ORM instance."""
        fanwork = Fanwork(author_id=author_id, **fields)
        self.session.add(fanwork)
        self.session.commit()
        self.session.refresh(fanwork)
        return fanwork

    def attach_tags(self, fanwork: Fanwork, names: Sequence[str]) -> list[Tag]:
        """Attach tags to an existing fanwork, creating unknown tags.

        This runs as its own commit after the fanwork exists; callers treat it
        as best-effort.
        """
        tags = TagRepository(self.session).get_or_create_many(names)
        if not tags:
            return []
        current = {tag.id for tag in fanwork.tags}
        for tag in tags:
            if tag.id not in current:
                fanwork.tags.append(tag)
        self.session.commit()
        self.session.refresh(fanwork)
        return tags

    def hide(self, fanwork: Fanwork, *, reason: str | None, moderator_id: str) -> Fanwork:
        fanwork.is_hidden = True
        fanwork.moderation_reason = reason
        fanwork.moderated_by = moderator_id
        fanwork.moderated_at = utcnow()
        return self._save(fanwork)

    def unhide(self, fanwork: Fanwork) -> Fanwork:
        fanwork.is_hidden = False
        fanwork.moderation_reason = None
        fanwork.moderated_by = None
        fanwork.moderated_at = None
        return self._save(fanwork)

    def delete(self, fanwork: Fanwork) -> None:
        """Delete a fanwork together with its comments, likes, bookmarks and tag links."""
        self.session.delete(fanwork)
        self.session.commit()

    def counts(self, fanwork_id: int) -> dict[str, int]:
        """Return like, comment and bookmark totals for a fanwork."""
        return {
            "likes": self.session.query(Like).filter(Like.fanwork_id == fanwork_id).count(),
            "comments": self.session.query(Comment)
            .filter(Comment.fanwork_id == fanwork_id)
            .count(),
            "bookmarks": self.session.query(Bookmark)
            .filter(Bookmark.fanwork_id == fanwork_id)
            .count(),
        }

    def _save(self, fanwork: Fanwork) -> Fanwork:
        self.session.add(fanwork)
        self.session.commit()
        self.session.refresh(fanwork)
        return fanwork
