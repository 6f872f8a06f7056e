"""Shared fixtures: an in-memory Supabase and an authenticated TestClient."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from referralhub.core.dependencies import get_current_user
from referralhub.database.supabase_client import get_service_supabase, get_supabase
from referralhub.main import app
from tests.fakes import FakeSupabase, grant_admin

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def user():
    return {"id": "user-1", "email": "alice@example.com", "user_metadata": {}, "app_metadata": {}}


@pytest.fixture
def profile(db, user):
    row = {
        "id": user["id"],
        "username": "alice",
        "email": user["email"],
        "referral_code": "ALICE1",
        "referred_by": None,
        "rank": "Starter",
        "account_status": "active",
        "current_pool": 1,
        "total_direct_referrals": 0,
        "active_direct_referrals": 0,
        "main_wallet_balance": 0,
        "fund_wallet_balance": 100,
        "created_at": "2024-01-01T00:00:00+00:00",
    }
    db.tables.setdefault("profiles", []).append(row)
    return dict(row)


@pytest.fixture
def admin(db, user):
    return grant_admin(db, user["id"])


@pytest.fixture
def client(db, user):
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_service_supabase] = lambda: db
    app.dependency_overrides[get_supabase] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
