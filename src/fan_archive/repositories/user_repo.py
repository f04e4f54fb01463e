"""Data access helpers for working with accounts."""
from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fan_archive.core.errors import ConflictError
from fan_archive.db.time import utcnow
from fan_archive.models.user import User, UserRole

__all__ = ["UserRepository"]

EMAIL_TAKEN = "Email already registered"
USERNAME_TAKEN = "Username already taken"


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email.lower()).first()

    def get_by_username(self, username: str) -> User | None:
        return self.session.query(User).filter(User.username == username).first()

    def ensure_available(self, email: str, username: str) -> None:
        """Raise `ConflictError` if the email or username is already in use."""
        if self.get_by_email(email) is not None:
            raise ConflictError(EMAIL_TAKEN)
        if self.get_by_username(username) is not None:
            raise ConflictError(USERNAME_TAKEN)

    def create(
        self,
        *,
        email: str,
        username: str,
        password_hash: str,
        first_name: str | None = None,
        last_name: str | None = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Insert a new account.

        The unique constraints are the final arbiter: if a concurrent
        registration claimed the email or username first, the insert fails and
        is reported as a conflict.
        """
        user = User(
            email=email.lower(),
            username=username,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role.value,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as err:
            self.session.rollback()
            if self.get_by_email(email) is not None:
                raise ConflictError(EMAIL_TAKEN) from err
            raise ConflictError(USERNAME_TAKEN) from err
        self.session.refresh(user)
        return user

    def verify_age(self, user: User) -> User:
        user.age_verified = True
        user.age_verified_at = utcnow()
        return self._save(user)

    def ban(self, user: User, *, reason: str | None, banned_by: str) -> User:
        """Mark an account as banned; banned accounts cannot authenticate."""
        user.is_banned = True
        user.ban_reason = reason
        user.banned_by = banned_by
        user.banned_at = utcnow()
        return self._save(user)

    def unban(self, user: User) -> User:
        user.is_banned = False
        user.ban_reason = None
        user.banned_by = None
        user.banned_at = None
        return self._save(user)

    def set_role(self, user: User, role: UserRole) -> User:
        user.role = role.value
        return self._save(user)

    def _save(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user
