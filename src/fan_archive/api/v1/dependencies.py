"""Shared API dependencies for authentication and common functionality."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from fan_archive.core.errors import ForbiddenError, UnauthorizedError
from fan_archive.core.security import decode_access_token
from fan_archive.db.session import get_db
from fan_archive.models import User, UserRole
from fan_archive.repositories import UserRepository
from fan_archive.services.media import LocalMediaStore, get_media_store

# HTTP Bearer scheme for JWT authentication. Missing credentials are reported
# by `get_current_user` so that the response keeps the `{message}` shape.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _authenticate(token: str, db: Session) -> User:
    """Resolve a bearer token to an active account.

    Role and ban status come from the database, so changes apply to tokens
    that were issued earlier.

    Raises:
        UnauthorizedError: If the token is invalid or expired, the account no
            longer exists, or the account is banned.
    """
    try:
        payload = decode_access_token(token)
    except JWTError as err:
        raise UnauthorizedError("Invalid or expired token") from err

    subject = payload.get("sub")
    if not subject:
        raise UnauthorizedError("Invalid or expired token")

    user = UserRepository(db).get_by_id(str(subject))
    if user is None:
        raise UnauthorizedError("User not found")
    if user.is_banned:
        raise UnauthorizedError("Account is banned")
    return user


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        UnauthorizedError: If no usable credential was sent.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")
    return _authenticate(credentials.credentials, db)


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Like `get_current_user`, but anonymous or invalid credentials yield None."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return _authenticate(credentials.credentials, db)
    except UnauthorizedError:
        return None


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def require_role(minimum: UserRole) -> Callable[[User], User]:
    """Build a dependency that admits users whose role is at least `minimum`."""

    def dependency(current_user: CurrentUserDep) -> User:
        if not current_user.has_role(minimum):
            raise ForbiddenError("Insufficient permissions")
        return current_user

    return dependency


ModeratorDep = Annotated[User, Depends(require_role(UserRole.MODERATOR))]
AdminDep = Annotated[User, Depends(require_role(UserRole.ADMIN))]


def get_media_store_dep() -> LocalMediaStore:
    return get_media_store()


MediaStoreDep = Annotated[LocalMediaStore, Depends(get_media_store_dep)]
