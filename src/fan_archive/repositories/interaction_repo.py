"""Data access helpers for likes and bookmarks."""
from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fan_archive.models.interaction import Bookmark, Like

__all__ = ["InteractionRepository"]


class InteractionRepository:
    """Toggle and query (user, fanwork) interaction pairs."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def toggle_like(self, user_id: str, fanwork_id: int) -> bool:
        """Flip the like state and return True if the fanwork is now liked."""
        return self._toggle(Like, user_id, fanwork_id)

    def toggle_bookmark(self, user_id: str, fanwork_id: int) -> bool:
        """Flip the bookmark state and return True if the fanwork is now bookmarked."""
        return self._toggle(Bookmark, user_id, fanwork_id)

    def is_liked(self, user_id: str, fanwork_id: int) -> bool:
        return self.session.get(Like, (user_id, fanwork_id)) is not None

    def is_bookmarked(self, user_id: str, fanwork_id: int) -> bool:
        return self.session.get(Bookmark, (user_id, fanwork_id)) is not None

    def _toggle(self, model: type[Like] | type[Bookmark], user_id: str, fanwork_id: int) -> bool:
        existing = self.session.get(model, (user_id, fanwork_id))
        if existing is not None:
            self.session.delete(existing)
            self.session.commit()
            return False

        self.session.add(model(user_id=user_id, fanwork_id=fanwork_id))
        try:
            self.session.commit()
        except IntegrityError:
            # A concurrent toggle inserted the same pair; the primary key keeps one row.
            self.session.rollback()
        return True
