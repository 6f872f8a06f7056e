"""Unit tests for the downline walk and network endpoints."""

import pytest
from fastapi import HTTPException

from referralhub.modules.network import service as network_service
from referralhub.modules.network.models import REFERRAL_CODE_BATCH
from referralhub.modules.network.service import NetworkService


def _member(member_id, sponsor_code, code=None, **extra):
    row = {
        "id": member_id,
        "username": member_id,
        "referral_code": code,
        "referred_by": sponsor_code,
        "account_status": "active",
        "created_at": "2024-05-01T00:00:00+00:00",
        "total_direct_referrals": 0,
    }
    row.update(extra)
    return row


@pytest.fixture
def downline(db, profile):
    # alice -> bob, carol ; bob -> dave ; dave -> erin
    db.tables["profiles"] += [
        _member("bob", "ALICE1", "BOB1", created_at="2024-06-03T00:00:00+00:00"),
        _member("carol", "ALICE1", None, account_status="inactive"),
        _member("dave", "BOB1", "DAVE1"),
        _member("erin", "DAVE1", None),
        _member("stranger", "NOPE", None),
    ]
    db.tables["referral_bonuses"] = [
        {"user_id": "user-1", "reference_id": "bob", "amount": 10},
        {"user_id": "user-1", "reference_id": "dave", "amount": 4},
        {"user_id": "user-1", "reference_id": None, "amount": 1},
    ]
    return profile


class TestWalkDownline:
    def test_levels_sponsors_and_team_sizes(self, db, downline):
        members = {m["id"]: m for m in NetworkService(db).walk_downline(downline)}

        assert set(members) == {"bob", "carol", "dave", "erin"}
        assert members["bob"]["level"] == 1
        assert members["dave"]["level"] == 2
        assert members["erin"]["level"] == 3
        assert members["dave"]["sponsor_id"] == "bob"
        assert members["bob"]["sponsor_id"] == "user-1"
        assert members["bob"]["team_size"] == 2
        assert members["dave"]["team_size"] == 1
        assert members["carol"]["team_size"] == 0

    def test_max_depth(self, db, downline):
        members = NetworkService(db).walk_downline(downline, max_depth=1)
        assert {m["id"] for m in members} == {"bob", "carol"}

    def test_cycles_terminate(self, db, profile):
        profile["referred_by"] = "BOB1"
        db.tables["profiles"][0]["referred_by"] = "BOB1"
        db.tables["profiles"].append(_member("bob", "ALICE1", "BOB1"))
        members = NetworkService(db).walk_downline(profile)
        assert [m["id"] for m in members] == ["bob"]

    def test_no_referral_code(self, db, profile):
        profile["referral_code"] = None
        assert NetworkService(db).walk_downline(profile) == []


class TestNetworkQueries:
    def test_filters(self, db, downline):
        service = NetworkService(db)
        assert [m.id for m in service.list_members(downline, search="CAR")] == ["carol"]
        assert {m.id for m in service.list_members(downline, level=1)} == {"bob", "carol"}
        assert {m.id for m in service.list_members(downline, status="inactive")} == {"carol"}

    def test_earnings_are_attributed(self, db, downline):
        members = {m.id: m for m in NetworkService(db).list_members(downline)}
        assert members["bob"].total_earned_from == 10
        assert members["carol"].total_earned_from == 0

    def test_stats(self, db, downline, now):
        stats = NetworkService(db).get_stats(downline, now)
        assert stats.total_network_size == 4
        assert stats.direct_referrals == 2
        assert stats.active_members == 1
        assert stats.total_volume == 15
        assert stats.this_month_growth == 1
        assert stats.levels_deep == 3
        assert [m.id for m in stats.top_performers][:2] == ["bob", "dave"]

    def test_referral_link(self, db, profile):
        link = NetworkService(db).get_referral_link(profile)
        assert link.link == "http://localhost:3000/register?ref=ALICE1"
        assert link.share_title == "Join My Network"
        assert "ALICE1" in link.share_text

    def test_referral_link_without_code(self, db, profile):
        profile["referral_code"] = None
        with pytest.raises(HTTPException) as exc:
            NetworkService(db).get_referral_link(profile)
        assert exc.value.status_code == 404


class TestNetworkRoutes:
    def test_members_route(self, client, downline):
        response = client.get("/api/v1/network/members", params={"level": 2})
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == ["dave"]

    def test_stats_route(self, client, downline):
        assert client.get("/api/v1/network/stats").json()["total_network_size"] == 4


class TestLargeDownlines:
    def test_wide_level_is_fetched_in_batches(self, db, profile, monkeypatch):
        monkeypatch.setattr(network_service, "PROFILE_PAGE_SIZE", 100)
        db.tables["profiles"] += [_member(f"m{i:03d}", "ALICE1", f"CODE{i:03d}") for i in range(450)]
        db.tables["profiles"] += [_member(f"g{i:03d}", f"CODE{i:03d}", None) for i in range(0, 450, 3)]

        members = NetworkService(db).walk_downline(profile)

        assert len([m for m in members if m["level"] == 1]) == 450
        assert len([m for m in members if m["level"] == 2]) == 150
        code_filters = [values for table, column, values in db.in_filters if column == "referred_by"]
        assert max(len(values) for values in code_filters) == REFERRAL_CODE_BATCH
        assert len(code_filters) >= 3
        assert next(m for m in members if m["id"] == "m000")["team_size"] == 1
