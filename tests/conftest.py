# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest

# Settings are read at import time; configure the environment first.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="fan-archive-uploads-"))
os.environ.setdefault("STATIC_DIR", os.path.join(tempfile.gettempdir(), "fan-archive-no-frontend"))
os.environ.setdefault("KEEPALIVE_ENABLED", "false")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from fan_archive.api.v1.dependencies import get_media_store_dep  # noqa: E402
from fan_archive.core.security import create_access_token, hash_password  # noqa: E402
from fan_archive.db.session import Base  # noqa: E402
from fan_archive.db.session import get_db as app_get_session  # noqa: E402
from fan_archive.main import app as fastapi_app  # noqa: E402
from fan_archive.models import Fanwork, User, UserRole  # noqa: E402
from fan_archive.repositories import FanworkRepository, UserRepository  # noqa: E402
from fan_archive.services.media import LocalMediaStore  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret123"

_USER_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    """A fresh in-memory database per test."""
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def media_store(tmp_path: Any) -> LocalMediaStore:
    return LocalMediaStore(tmp_path / "uploads", max_bytes=64 * 1024)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    session_factory: sessionmaker[Session],
    media_store: LocalMediaStore,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_media_store_dep] = lambda: media_store
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_media_store_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting an account with the given role."""

    def _make_user(
        role: UserRole = UserRole.USER,
        *,
        username: str | None = None,
        email: str | None = None,
        password: str = TEST_PASSWORD,
        banned: bool = False,
    ) -> User:
        n = next(_USER_COUNTER)
        username = username or f"{role.value}{n}"
        repo = UserRepository(db_session)
        user = repo.create(
            email=email or f"{username}@fanmail.com",
            username=username,
            password_hash=hash_password(password),
            role=role,
        )
        if banned:
            user = repo.ban(user, reason="spam", banned_by=user.id)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.USER, username="reader")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.USER, username="otherreader")


@pytest.fixture()
def moderator(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.MODERATOR, username="modder")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user(UserRole.ADMIN, username="boss")


def bearer(user: User) -> dict[str, str]:
    """Authorization header for `user`."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build bearer headers for any account created in a test."""
    return bearer


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    return bearer(test_user)


@pytest.fixture()
def moderator_token(moderator: User) -> dict[str, str]:
    return bearer(moderator)


@pytest.fixture()
def admin_token(admin: User) -> dict[str, str]:
    return bearer(admin)


@pytest.fixture()
def make_fanwork(db_session: Session, test_user: User) -> Callable[..., Fanwork]:
    """Factory persisting a fanwork, by default authored by `test_user`."""

    def _make_fanwork(
        title: str = "A Quiet Harbor",
        *,
        author: User | None = None,
        type: str = "fanfiction",
        rating: str = "teen",
        tags: list[str] | None = None,
        hidden: bool = False,
        **fields: Any,
    ) -> Fanwork:
        repo = FanworkRepository(db_session)
        fanwork = repo.create(
            author_id=(author or test_user).id,
            title=title,
            type=type,
            rating=rating,
            is_hidden=hidden,
            **fields,
        )
        if tags:
            repo.attach_tags(fanwork, tags)
        return fanwork

    return _make_fanwork


@pytest.fixture()
def test_fanwork(make_fanwork: Callable[..., Fanwork]) -> Fanwork:
    return make_fanwork(description="Two ships pass in the night.", tags=["Angst", "ships"])
