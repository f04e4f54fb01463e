"""Tests for API dependencies module."""

from datetime import timedelta

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from fan_archive.api.v1.dependencies import (
    get_current_user,
    get_optional_user,
    require_role,
)
from fan_archive.core.errors import ForbiddenError, UnauthorizedError
from fan_archive.core.security import create_access_token
from fan_archive.models import UserRole


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    """Test the get_current_user dependency function."""

    def test_valid_token(self, db_session, test_user):
        token = create_access_token(test_user.id)

        result = get_current_user(_credentials(token), db_session)

        assert result.id == test_user.id

    def test_missing_credentials(self, db_session):
        with pytest.raises(UnauthorizedError) as exc_info:
            get_current_user(None, db_session)

        assert exc_info.value.message == "Authentication required"

    def test_invalid_jwt(self, db_session):
        with pytest.raises(UnauthorizedError):
            get_current_user(_credentials("invalid_token"), db_session)

    def test_expired_token(self, db_session, test_user):
        token = create_access_token(test_user.id, expires_delta=timedelta(seconds=-5))

        with pytest.raises(UnauthorizedError):
            get_current_user(_credentials(token), db_session)

    def test_unknown_user(self, db_session):
        token = create_access_token("00000000-0000-0000-0000-000000000000")

        with pytest.raises(UnauthorizedError) as exc_info:
            get_current_user(_credentials(token), db_session)

        assert exc_info.value.message == "User not found"

    def test_banned_user(self, db_session, make_user):
        banned = make_user(banned=True)

        with pytest.raises(UnauthorizedError):
            get_current_user(_credentials(create_access_token(banned.id)), db_session)


class TestGetOptionalUser:
    def test_anonymous(self, db_session):
        assert get_optional_user(None, db_session) is None

    def test_invalid_token_is_anonymous(self, db_session):
        assert get_optional_user(_credentials("garbage"), db_session) is None

    def test_valid_token(self, db_session, test_user):
        user = get_optional_user(_credentials(create_access_token(test_user.id)), db_session)
        assert user is not None and user.id == test_user.id


class TestRequireRole:
    def test_plain_user_is_forbidden(self, test_user):
        check = require_role(UserRole.MODERATOR)
        with pytest.raises(ForbiddenError):
            check(test_user)

    @pytest.mark.parametrize("fixture_name", ["moderator", "admin"])
    def test_moderator_and_admin_pass(self, request, fixture_name):
        user = request.getfixturevalue(fixture_name)
        assert require_role(UserRole.MODERATOR)(user) is user

    def test_admin_only(self, moderator, admin):
        check = require_role(UserRole.ADMIN)
        with pytest.raises(ForbiddenError):
            check(moderator)
        assert check(admin) is admin
