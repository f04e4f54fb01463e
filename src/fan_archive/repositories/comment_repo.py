"""Data access helpers for comments."""
from __future__ import annotations

from sqlalchemy.orm import Session, selectinload

from fan_archive.models.comment import Comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_fanwork(self, fanwork_id: int) -> list[Comment]:
        """Return a fanwork's comments, oldest first."""
        return (
            self.session.query(Comment)
            .options(selectinload(Comment.author))
            .filter(Comment.fanwork_id == fanwork_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )

    def create(self, *, fanwork_id: int, user_id: str, content: str) -> Comment:
        comment = Comment(fanwork_id=fanwork_id, user_id=user_id, content=content)
        self.session.add(comment)
        self.session.commit()
        self.session.refresh(comment)
        return comment
