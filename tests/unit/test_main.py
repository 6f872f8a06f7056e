"""Application-level endpoints, middleware and the audit writer."""

from referralhub.config import settings
from referralhub.core.audit import log_admin_activity


class TestHealth:
    def test_root(self, client):
        body = client.get("/").json()
        assert body["status"] == "healthy"
        assert body["service"] == settings.app_name
        assert body["api"] == "/api/v1"

    def test_health_has_security_headers(self, client):
        response = client.get("/health")
        assert response.json() == {"status": "healthy"}
        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"

    def test_ready_requires_supabase(self, client, monkeypatch):
        monkeypatch.setattr(settings, "supabase_service_role_key", "")
        assert client.get("/ready").status_code == 503

    def test_ready(self, client, monkeypatch):
        monkeypatch.setattr(settings, "supabase_url", "https://project.supabase.co")
        monkeypatch.setattr(settings, "supabase_service_role_key", "service-key")
        assert client.get("/ready").json() == {"status": "ready"}


class TestAuditLog:
    def test_writes_row(self, db):
        assert log_admin_activity(db, "admin-1", "UPDATE_USER_PROFILE", "user", "u1", {"rank": "Gold"}) is True
        row = db.rows("admin_activity_logs")[0]
        assert row["admin_user_id"] == "admin-1"
        assert row["resource_id"] == "u1"
        assert row["details"] == {"rank": "Gold"}

    def test_failure_is_not_raised(self, db):
        db.failing_tables.add("admin_activity_logs")
        assert log_admin_activity(db, "admin-1", "ADJUST_USER_BALANCE", "user", "u1") is False
