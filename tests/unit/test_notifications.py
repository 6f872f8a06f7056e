"""Unit tests for user and admin notifications."""

import pytest
from fastapi import HTTPException

from referralhub.modules.admin_notifications.schemas import AdminNotificationCreate
from referralhub.modules.admin_notifications.service import AdminNotificationService
from referralhub.modules.notifications.service import NotificationService
from tests.fakes import grant_admin


@pytest.fixture
def inbox(db):
    db.tables["notifications"] = [
        {"id": "n1", "user_id": "user-1", "title": "Bonus", "message": "You earned $10", "is_read": False,
         "created_at": "2024-06-10T00:00:00Z"},
        {"id": "n2", "user_id": "user-1", "title": "Pool", "message": "Pool 1 completed", "is_read": True,
         "created_at": "2024-06-11T00:00:00Z"},
        {"id": "n3", "user_id": "other", "title": "Other", "message": "Not yours", "is_read": False,
         "created_at": "2024-06-12T00:00:00Z"},
    ]
    return db


class TestUserNotifications:
    def test_list_is_scoped_and_counted(self, inbox):
        listing = NotificationService(inbox).list_notifications("user-1")
        assert [n.id for n in listing.notifications] == ["n2", "n1"]
        assert listing.unread_count == 1

    def test_cannot_touch_someone_elses(self, inbox):
        with pytest.raises(HTTPException) as exc:
            NotificationService(inbox).mark_read("user-1", "n3")
        assert exc.value.status_code == 404
        with pytest.raises(HTTPException):
            NotificationService(inbox).delete_notification("user-1", "n3")

    def test_mark_all_read(self, inbox):
        assert NotificationService(inbox).mark_all_read("user-1") == 1
        assert next(r for r in inbox.rows("notifications") if r["id"] == "n3")["is_read"] is False

    def test_routes(self, client, inbox):
        assert client.post("/api/v1/notifications/read-all").json()["updated"] == 1
        assert client.post("/api/v1/notifications/n1/read").status_code == 200
        assert client.delete("/api/v1/notifications/n2").status_code == 204
        assert client.get("/api/v1/notifications").json()["notifications"][0]["id"] == "n1"


class TestAdminNotifications:
    def test_create_records_author(self, db):
        created = AdminNotificationService(db).create_notification(
            AdminNotificationCreate(title="Maintenance", message="Sunday 02:00 UTC", type="warning", priority=2),
            admin_id="admin-1",
        )
        assert created.created_by == "admin-1"
        assert created.type == "warning"
        assert created.is_read is False

    def test_unread_count(self, db):
        db.tables["admin_notifications"] = [
            {"id": "a1", "title": "t", "message": "m", "is_read": False},
            {"id": "a2", "title": "t", "message": "m", "is_read": True},
        ]
        assert AdminNotificationService(db).unread_count() == 1

    def test_mark_read_and_delete_unknown(self, db):
        service = AdminNotificationService(db)
        with pytest.raises(HTTPException):
            service.mark_read("missing")
        with pytest.raises(HTTPException):
            service.delete_notification("missing")

    def test_create_requires_permission(self, client, db, user):
        grant_admin(db, user["id"], grants=["notifications.manage"])
        response = client.post("/api/v1/admin/notifications", json={"title": "x", "message": "y"})
        assert response.status_code == 403

    def test_type_is_validated(self, client, admin):
        response = client.post("/api/v1/admin/notifications", json={"title": "x", "message": "y", "type": "urgent"})
        assert response.status_code == 422

    def test_admin_routes(self, client, db, admin):
        response = client.post("/api/v1/admin/notifications", json={
            "title": "Backup done", "message": "2.3 GB", "type": "success", "expires_at": "2024-07-01T00:00:00Z"
        })
        assert response.status_code == 201
        notification_id = response.json()["id"]
        assert db.rows("admin_notifications")[0]["expires_at"].startswith("2024-07-01")

        assert client.get("/api/v1/admin/notifications/unread-count").json() == {"unread_count": 1}
        assert client.post(f"/api/v1/admin/notifications/{notification_id}/read").status_code == 200
        assert client.get("/api/v1/admin/notifications").json()["unread_count"] == 0
        assert client.delete(f"/api/v1/admin/notifications/{notification_id}").status_code == 204
