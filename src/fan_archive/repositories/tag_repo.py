"""Data access helpers for tags."""
from __future__ import annotations

import re
from collections.abc import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from fan_archive.models.fanwork import Tag, fanwork_tag

__all__ = ["TagRepository", "normalize_tag_names"]

MAX_TAG_LENGTH = 100
_WHITESPACE = re.compile(r"\s+")


def normalize_tag_names(names: Iterable[str]) -> list[str]:
    """Trim, lower-case and de-duplicate tag names, preserving first-seen order."""
    seen: dict[str, None] = {}
    for raw in names:
        name = _WHITESPACE.sub(" ", str(raw)).strip().lower()[:MAX_TAG_LENGTH]
        if name:
            seen.setdefault(name, None)
    return list(seen)


class TagRepository:
    """Thin wrapper around database access for tag entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_with_counts(self) -> list[tuple[Tag, int]]:
        """Return every tag ordered by name with the number of fanworks using it."""
        rows = (
            self.session.query(Tag, func.count(fanwork_tag.c.fanwork_id))
            .outerjoin(fanwork_tag, fanwork_tag.c.tag_id == Tag.id)
            .group_by(Tag.id)
            .order_by(Tag.name)
            .all()
        )
        return [(tag, int(count)) for tag, count in rows]

    def get_or_create_many(self, names: Iterable[str]) -> list[Tag]:
        """Return tags for `names`, creating the ones that do not exist yet."""
        normalized = normalize_tag_names(names)
        if not normalized:
            return []

        existing = {
            tag.name: tag
            for tag in self.session.query(Tag).filter(Tag.name.in_(normalized)).all()
        }
        for name in normalized:
            if name not in existing:
                tag = Tag(name=name)
                self.session.add(tag)
                existing[name] = tag
        # A tag created concurrently by another request surfaces here as an IntegrityError.
        self.session.flush()
        return [existing[name] for name in normalized]
