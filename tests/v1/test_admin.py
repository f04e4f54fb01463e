# tests/v1/test_admin.py
"""Tests for moderation endpoints under /api/admin."""

from __future__ import annotations

import pytest
from fastapi import status

from fan_archive.models import Comment, Fanwork, Like, ReportTargetType, UserRole
from fan_archive.repositories import ReportRepository


@pytest.fixture()
def make_report(db_session, test_user):
    def _make_report(reason: str = "Spam", target_id: str = "1"):
        return ReportRepository(db_session).create(
            reporter_id=test_user.id,
            target_type=ReportTargetType.FANWORK,
            target_id=target_id,
            reason=reason,
        )

    return _make_report


# --- access control -----------------------------------------------------------


def test_plain_user_is_forbidden(client, auth_token) -> None:
    response = client.get("/api/admin/reports", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"message": "Insufficient permissions"}


def test_anonymous_is_unauthorized(client) -> None:
    assert client.get("/api/admin/reports").status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.parametrize("token_fixture", ["moderator_token", "admin_token"])
def test_moderator_and_admin_can_list_reports(client, request, token_fixture, make_report) -> None:
    make_report("Old")
    make_report("New")

    response = client.get("/api/admin/reports", headers=request.getfixturevalue(token_fixture))
    assert response.status_code == status.HTTP_200_OK
    assert [report["reason"] for report in response.json()] == ["New", "Old"]


# --- reports ------------------------------------------------------------------


def test_review_report(client, moderator, moderator_token, make_report) -> None:
    report = make_report()

    response = client.patch(
        f"/api/admin/reports/{report.id}",
        json={"status": "resolved", "moderationAction": "Hid the work"},
        headers=moderator_token,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "resolved"
    assert data["moderationAction"] == "Hid the work"
    assert data["reviewedBy"] == moderator.id
    assert data["reviewedAt"] is not None


def test_filter_reports_by_status(client, moderator_token, make_report) -> None:
    make_report("Open one")
    closed = make_report("Closed one")
    client.patch(
        f"/api/admin/reports/{closed.id}", json={"status": "dismissed"}, headers=moderator_token
    )

    response = client.get(
        "/api/admin/reports", params={"status": "pending"}, headers=moderator_token
    )
    assert [report["reason"] for report in response.json()] == ["Open one"]


def test_review_missing_report(client, moderator_token) -> None:
    response = client.patch(
        "/api/admin/reports/999", json={"status": "resolved"}, headers=moderator_token
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "Report not found"}


def test_review_report_invalid_status(client, moderator_token, make_report) -> None:
    report = make_report()
    response = client.patch(
        f"/api/admin/reports/{report.id}", json={"status": "closed"}, headers=moderator_token
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


# --- bans ---------------------------------------------------------------------


def test_moderator_bans_and_unbans_user(client, moderator, moderator_token, test_user, auth_token) -> None:
    response = client.post(
        f"/api/admin/users/{test_user.id}/ban",
        json={"reason": "Spamming comments"},
        headers=moderator_token,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["isBanned"] is True
    assert data["banReason"] == "Spamming comments"
    assert data["bannedBy"] == moderator.id

    # The existing token stops working immediately.
    assert client.get("/api/auth/user", headers=auth_token).status_code == 401

    response = client.post(f"/api/admin/users/{test_user.id}/unban", headers=moderator_token)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["isBanned"] is False
    assert data["banReason"] is None
    assert data["bannedBy"] is None
    assert data["bannedAt"] is None

    assert client.get("/api/auth/user", headers=auth_token).status_code == 200


def test_ban_without_body(client, moderator_token, test_user) -> None:
    response = client.post(f"/api/admin/users/{test_user.id}/ban", headers=moderator_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["banReason"] is None


def test_cannot_ban_self(client, moderator, moderator_token) -> None:
    response = client.post(f"/api/admin/users/{moderator.id}/ban", headers=moderator_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_moderator_cannot_ban_equal_or_higher_role(
    client, moderator_token, make_user, admin
) -> None:
    peer = make_user(UserRole.MODERATOR)
    assert client.post(f"/api/admin/users/{peer.id}/ban", headers=moderator_token).status_code == 403
    assert client.post(f"/api/admin/users/{admin.id}/ban", headers=moderator_token).status_code == 403


def test_admin_can_ban_moderator(client, admin_token, moderator) -> None:
    response = client.post(f"/api/admin/users/{moderator.id}/ban", headers=admin_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["isBanned"] is True


def test_ban_missing_user(client, moderator_token) -> None:
    response = client.post("/api/admin/users/nobody/ban", headers=moderator_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "User not found"}


# --- roles --------------------------------------------------------------------


def test_admin_changes_role(client, admin_token, test_user, auth_token) -> None:
    response = client.patch(
        f"/api/admin/users/{test_user.id}/role", json={"role": "moderator"}, headers=admin_token
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["role"] == "moderator"

    assert client.get("/api/admin/reports", headers=auth_token).status_code == 200


def test_invalid_role(client, admin_token, test_user) -> None:
    response = client.patch(
        f"/api/admin/users/{test_user.id}/role", json={"role": "overlord"}, headers=admin_token
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Invalid role"}


def test_admin_cannot_change_own_role(client, admin, admin_token) -> None:
    response = client.patch(
        f"/api/admin/users/{admin.id}/role", json={"role": "user"}, headers=admin_token
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_moderator_cannot_change_roles(client, moderator_token, test_user) -> None:
    response = client.patch(
        f"/api/admin/users/{test_user.id}/role", json={"role": "admin"}, headers=moderator_token
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


# --- fanwork visibility -------------------------------------------------------


def test_hide_and_unhide_fanwork(client, moderator, moderator_token, test_fanwork) -> None:
    response = client.patch(
        f"/api/admin/fanworks/{test_fanwork.id}/hide",
        json={"reason": "Off-topic"},
        headers=moderator_token,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["isHidden"] is True
    assert data["moderationReason"] == "Off-topic"
    assert data["moderatedBy"] == moderator.id
    assert data["moderatedAt"] is not None
    assert client.get("/api/fanworks").json() == []

    response = client.patch(
        f"/api/admin/fanworks/{test_fanwork.id}/unhide", headers=moderator_token
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["isHidden"] is False
    assert data["moderationReason"] is None
    assert data["moderatedBy"] is None
    assert data["moderatedAt"] is None
    assert len(client.get("/api/fanworks").json()) == 1


def test_hide_missing_fanwork(client, moderator_token) -> None:
    response = client.patch("/api/admin/fanworks/999/hide", json={}, headers=moderator_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_fanwork(client, db_session, moderator_token, test_fanwork, auth_token) -> None:
    client.post(f"/api/fanworks/{test_fanwork.id}/like", headers=auth_token)
    client.post(
        f"/api/fanworks/{test_fanwork.id}/comments", json={"content": "bye"}, headers=auth_token
    )

    response = client.delete(f"/api/admin/fanworks/{test_fanwork.id}", headers=moderator_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""

    db_session.expire_all()
    assert db_session.query(Fanwork).count() == 0
    assert db_session.query(Comment).count() == 0
    assert db_session.query(Like).count() == 0
    assert client.get(f"/api/fanworks/{test_fanwork.id}").status_code == 404


def test_delete_fanwork_removes_upload(client, auth_token, moderator_token, media_store) -> None:
    created = client.post(
        "/api/fanworks",
        data={"title": "Doodle", "type": "artwork", "rating": "all-ages"},
        files={"file": ("doodle.gif", b"GIF89a....", "image/gif")},
        headers=auth_token,
    ).json()
    stored = media_store.root / created["contentUrl"].rsplit("/", 1)[1]
    assert stored.exists()

    response = client.delete(f"/api/admin/fanworks/{created['id']}", headers=moderator_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert not stored.exists()


def test_plain_user_cannot_delete(client, auth_token, test_fanwork) -> None:
    response = client.delete(f"/api/admin/fanworks/{test_fanwork.id}", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
