"""Authentication endpoints for the Fan Archive API."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from fan_archive.api.v1.dependencies import CurrentUserDep, SessionDep
from fan_archive.core.errors import UnauthorizedError, ValidationFailedError
from fan_archive.core.security import create_access_token, hash_password, verify_password
from fan_archive.models import User
from fan_archive.repositories import UserRepository
from fan_archive.schemas.user import (
    AgeVerificationRequest,
    AuthResponse,
    AuthUser,
    LoginRequest,
    RegisterRequest,
    UserProfile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

INVALID_CREDENTIALS = "Invalid credentials"


def _auth_response(user: User) -> AuthResponse:
    token = create_access_token(user.id, extra_claims={"role": user.role})
    return AuthResponse(user=AuthUser.model_validate(user), token=token)


@router.post("/register", response_model=AuthResponse)
def register(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return it with a bearer token."""
    users = UserRepository(db)
    users.ensure_available(payload.email, payload.username)
    user = users.create(
        email=payload.email,
        username=payload.username,
        password_hash=hash_password(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    logger.info("Registered user %s (%s)", user.username, user.id)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    user = UserRepository(db).get_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.password_hash):
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if user.is_banned:
        logger.info("Rejected login for banned user %s", user.id)
        raise UnauthorizedError(INVALID_CREDENTIALS)
    return _auth_response(user)


@router.get("/user", response_model=UserProfile)
def get_profile(current_user: CurrentUserDep) -> User:
    """Return the authenticated user's profile."""
    return current_user


@router.post("/verify-age", response_model=UserProfile)
def verify_age(
    payload: AgeVerificationRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Record the user's confirmation that they may view mature content."""
    if not payload.confirmed:
        raise ValidationFailedError(message="Age verification confirmation required")
    return UserRepository(db).verify_age(current_user)
