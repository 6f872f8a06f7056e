"""Unit tests for the admin activity log viewer."""

import pytest

from referralhub.modules.admin_logs.schemas import ActivityLogFilters
from referralhub.modules.admin_logs.service import AdminLogService
from tests.fakes import grant_admin


@pytest.fixture
def logs(db):
    db.tables["admin_activity_logs"] = [
        {"id": "l1", "admin_user_id": "a1", "action": "UPDATE_WITHDRAWAL_STATUS", "resource_type": "withdrawal",
         "resource_id": "w-77", "details": {"new_status": "completed"}, "ip_address": "10.0.0.1",
         "created_at": "2024-06-15T09:00:00Z", "admin_users": {"username": "root"}},
        {"id": "l2", "admin_user_id": "a2", "action": "ADJUST_USER_BALANCE", "resource_type": "user",
         "resource_id": "u-5", "details": None, "created_at": "2024-06-12T09:00:00Z",
         "admin_users": {"username": "ops"}},
        {"id": "l3", "admin_user_id": "a3", "action": "UPDATE_USER_PROFILE", "resource_type": "user",
         "resource_id": "u-6", "created_at": "2024-06-10T09:00:00Z", "admin_users": None},
        {"id": "old", "admin_user_id": "a1", "action": "UPDATE_USER_PROFILE", "resource_type": "user",
         "resource_id": "u-1", "created_at": "2024-05-01T09:00:00Z", "admin_users": {"username": "root"}},
    ]
    return db


class TestListLogs:
    def test_window_and_order(self, logs, now):
        listing = AdminLogService(logs).list_logs(ActivityLogFilters(), now)
        assert [log.id for log in listing.logs] == ["l1", "l2", "l3"]
        assert listing.logs[2].admin_username == "Unknown"
        assert listing.logs[1].details == {}
        assert listing.actions == ["ADJUST_USER_BALANCE", "UPDATE_USER_PROFILE", "UPDATE_WITHDRAWAL_STATUS"]
        assert listing.resource_types == ["user", "withdrawal"]

    def test_wider_window(self, logs, now):
        assert AdminLogService(logs).list_logs(ActivityLogFilters(days=90), now).total == 4

    @pytest.mark.parametrize("search,expected", [
        ("ROOT", ["l1"]),
        ("balance", ["l2"]),
        ("u-6", ["l3"]),
        ("withdrawal", ["l1"]),
    ])
    def test_search(self, logs, now, search, expected):
        listing = AdminLogService(logs).list_logs(ActivityLogFilters(search=search), now)
        assert [log.id for log in listing.logs] == expected

    def test_action_and_resource_filters(self, logs, now):
        filters = ActivityLogFilters(resource_type="user", action="UPDATE_USER_PROFILE")
        listing = AdminLogService(logs).list_logs(filters, now)
        assert [log.id for log in listing.logs] == ["l3"]
        assert len(listing.actions) == 3

    def test_export(self, logs, now):
        lines = AdminLogService(logs).export_csv(ActivityLogFilters(resource_type="withdrawal"), now).splitlines()
        assert lines[0] == "Timestamp,Admin,Action,Resource Type,Resource ID,IP Address"
        assert lines[1] == "2024-06-15T09:00:00+00:00,root,UPDATE_WITHDRAWAL_STATUS,withdrawal,w-77,10.0.0.1"
        assert len(lines) == 2


class TestLogRoutes:
    def test_requires_view_logs(self, client, logs, user):
        grant_admin(logs, user["id"], grants=["system.view_settings"])
        assert client.get("/api/v1/admin/logs").status_code == 403

    def test_export_download(self, client, logs, user):
        grant_admin(logs, user["id"], grants=["system.view_logs"])
        response = client.get("/api/v1/admin/logs/export", params={"days": 365})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="admin_activity_logs_' in response.headers["content-disposition"]

    def test_rejects_bad_window(self, client, logs, admin):
        assert client.get("/api/v1/admin/logs", params={"days": "week"}).status_code == 422
