# tests/test_lifespan.py
"""Startup and shutdown hooks."""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from fan_archive import main
from fan_archive.core.settings import settings


def test_keepalive_worker_runs_for_app_lifetime(mocker, app) -> None:
    mocker.patch.object(settings, "keepalive_enabled", True)
    worker = mocker.MagicMock(start=AsyncMock(), stop=AsyncMock())
    worker_cls = mocker.patch.object(main, "KeepAliveWorker", return_value=worker)

    with TestClient(app):
        worker_cls.assert_called_once_with()
        worker.start.assert_awaited_once()
        worker.stop.assert_not_awaited()
        assert app.state.keepalive_worker is worker

    worker.stop.assert_awaited_once()


def test_keepalive_disabled_by_default(mocker, app) -> None:
    worker_cls = mocker.patch.object(main, "KeepAliveWorker")

    with TestClient(app):
        assert app.state.keepalive_worker is None

    worker_cls.assert_not_called()


def test_auto_create_tables(mocker, app) -> None:
    mocker.patch.object(settings, "auto_create_tables", True)
    create_tables = mocker.patch.object(main, "create_tables")

    with TestClient(app):
        create_tables.assert_called_once_with()
