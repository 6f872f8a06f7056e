"""Unit tests for admin account and role management."""

import pytest
from fastapi import HTTPException

from referralhub.config.admin_roles_config import build_permissions
from referralhub.modules.admin_admins.schemas import AdminCreate, AdminStatusUpdate, RoleCreate
from referralhub.modules.admin_admins.service import AdminAccountService, normalize_permissions
from tests.fakes import grant_admin

SUPPORT_ROLE = {
    "id": "role-support", "name": "support", "display_name": "Support", "is_active": True,
    "permissions": build_permissions(["users.view"]),
}


@pytest.fixture
def team(db):
    db.tables["admin_roles"] = [dict(SUPPORT_ROLE), {**SUPPORT_ROLE, "id": "role-old", "name": "legacy", "is_active": False}]
    db.tables["admin_users"] = [
        {"id": "a1", "email": "root@example.com", "username": "root", "is_active": True,
         "failed_login_attempts": 0, "last_login_at": "2024-06-15T08:00:00Z", "role": dict(SUPPORT_ROLE),
         "created_at": "2024-01-01T00:00:00Z"},
        {"id": "a2", "email": "ops@example.com", "username": "ops", "is_active": False,
         "failed_login_attempts": 5, "last_login_at": "2024-06-01T08:00:00Z", "role": dict(SUPPORT_ROLE),
         "created_at": "2024-02-01T00:00:00Z"},
    ]
    db.tables["profiles"] = [{"id": "u9", "email": "carol@example.com", "username": "carol"}]
    return db


class TestNormalizePermissions:
    def test_fills_missing_actions(self):
        permissions = normalize_permissions({"users": {"view": True}})
        assert permissions["users"] == {"view": True, "edit": False, "manage_balances": False}
        assert permissions["system"]["manage_admins"] is False

    def test_rejects_unknown(self):
        with pytest.raises(HTTPException) as exc:
            normalize_permissions({"users": {"delete": True}, "billing": {"view": True}})
        assert exc.value.status_code == 400
        assert exc.value.detail == "Unknown permissions: billing.view, users.delete"


class TestAdminAccounts:
    def test_list_with_stats(self, team, now):
        listing = AdminAccountService(team).list_admins(now)
        assert [a.id for a in listing.admins] == ["a2", "a1"]
        assert listing.stats.total_admins == 2
        assert listing.stats.active_admins == 1
        assert listing.stats.locked_admins == 1
        assert listing.stats.recent_logins == 1

    def test_grant_admin_to_member(self, team):
        AdminAccountService(team).create_admin(AdminCreate(email="carol@example.com", role_id="role-support"), "a1")
        row = next(r for r in team.rows("admin_users") if r["id"] == "u9")
        assert row["role_id"] == "role-support"
        assert row["is_active"] is True
        log = team.rows("admin_activity_logs")[0]
        assert log["action"] == "CREATE_ADMIN_USER"
        assert log["details"] == {"email": "carol@example.com", "role": "support"}

    @pytest.mark.parametrize("email,role_id,code", [
        ("nobody@example.com", "role-support", 404),
        ("carol@example.com", "role-old", 404),
        ("root@example.com", "role-support", 404),
    ])
    def test_grant_rejections(self, team, email, role_id, code):
        with pytest.raises(HTTPException) as exc:
            AdminAccountService(team).create_admin(AdminCreate(email=email, role_id=role_id), "a1")
        assert exc.value.status_code == code

    def test_existing_admin(self, team):
        team.tables["profiles"].append({"id": "a2", "email": "ops@example.com", "username": "ops"})
        with pytest.raises(HTTPException) as exc:
            AdminAccountService(team).create_admin(AdminCreate(email="ops@example.com", role_id="role-support"), "a1")
        assert exc.value.status_code == 409

    def test_toggle_status(self, team):
        updated = AdminAccountService(team).update_status("a2", AdminStatusUpdate(is_active=True), "a1")
        assert updated.is_active is True
        assert next(r for r in team.rows("admin_users") if r["id"] == "a2")["is_active"] is True
        assert team.rows("admin_activity_logs")[0]["details"] == {"old_status": False, "new_status": True}

    def test_cannot_change_own_status(self, team):
        with pytest.raises(HTTPException) as exc:
            AdminAccountService(team).update_status("a1", AdminStatusUpdate(is_active=False), "a1")
        assert exc.value.detail == "You cannot change your own admin status"
        assert team.rows("admin_activity_logs") == []


class TestRoles:
    def test_only_active_roles_are_listed(self, team):
        assert [r.name for r in AdminAccountService(team).list_roles()] == ["support"]

    def test_create_role(self, team):
        role = AdminAccountService(team).create_role(RoleCreate(
            name="auditor", display_name="Auditor", permissions={"system": {"view_logs": True}},
        ), "a1")
        assert role.permissions["system"]["view_logs"] is True
        assert role.permissions["finances"]["view"] is False
        assert team.rows("admin_activity_logs")[0]["details"]["permissions"] == ["system.view_logs"]

    def test_duplicate_role_name(self, team):
        with pytest.raises(HTTPException) as exc:
            AdminAccountService(team).create_role(RoleCreate(name="support", display_name="Again"), "a1")
        assert exc.value.status_code == 409


class TestAdminRoutes:
    def test_requires_manage_admins(self, client, team, user):
        grant_admin(team, user["id"], grants=["system.view_logs"])
        assert client.get("/api/v1/admin/admins").status_code == 403

    def test_roles_route(self, client, team, admin):
        body = client.get("/api/v1/admin/admins/roles").json()
        assert [r["id"] for r in body] == ["role-support"]

    def test_create_role_rejects_bad_name(self, client, team, admin):
        response = client.post("/api/v1/admin/admins/roles", json={"name": "Bad Name", "display_name": "x"})
        assert response.status_code == 422
