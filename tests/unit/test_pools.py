"""Unit tests for pool progress, progression RPCs and the expiry scheduler."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException

from referralhub.modules.pools import scheduler
from referralhub.modules.pools.scheduler import check_expired_pools, pool_scheduler_loop
from referralhub.modules.pools.service import (
    PoolService,
    average_completion_minutes,
    build_current_pool,
    needs_referral_cta,
)


def _pool(pool_id, status, pool_number=1, **extra):
    row = {
        "id": pool_id,
        "user_id": "user-1",
        "pool_number": pool_number,
        "pool_amount": 10 * pool_number,
        "time_limit_minutes": 60,
        "direct_referral_requirement": pool_number,
        "status": status,
        "reward_paid": 0,
        "created_at": f"2024-06-0{pool_number}T00:00:00+00:00",
    }
    row.update(extra)
    return row


class TestHelpers:
    def test_current_pool_progress(self, now):
        pool = _pool("p1", "active", timer_end=(now + timedelta(minutes=15)).isoformat())
        current = build_current_pool(pool, now)
        assert current.time_remaining_seconds == 900
        assert current.time_remaining_text == "15m 0s"
        assert current.progress_percentage == 75

    def test_overdue_pool_is_clamped(self, now):
        pool = _pool("p1", "active", timer_end=(now - timedelta(minutes=5)).isoformat())
        current = build_current_pool(pool, now)
        assert current.time_remaining_seconds == 0
        assert current.progress_percentage == 100

    def test_average_completion_minutes(self):
        completed = [
            {"started_at": "2024-06-01T00:00:00Z", "completed_at": "2024-06-01T00:20:00Z"},
            {"started_at": "2024-06-02T00:00:00Z", "completed_at": "2024-06-02T00:40:00Z"},
            {"started_at": None, "completed_at": "2024-06-02T00:40:00Z"},
        ]
        assert average_completion_minutes(completed) == 30
        assert average_completion_minutes([]) == 0

    def test_referral_cta(self, now):
        behind = build_current_pool(_pool("p", "active", 2, timer_end=(now + timedelta(minutes=10)).isoformat()), now)
        assert needs_referral_cta([], behind, active_referrals=1)
        assert not needs_referral_cta([], behind, active_referrals=2)
        assert needs_referral_cta([{"status": "expired"}], None, 0)
        assert not needs_referral_cta([], None, 0)


class TestPoolService:
    def test_overview(self, db, profile, now):
        db.tables["pool_progress"] = [
            _pool("p1", "completed", 1, reward_paid=10,
                  started_at="2024-06-01T00:00:00Z", completed_at="2024-06-01T00:30:00Z"),
            _pool("p2", "active", 2, timer_end=(now + timedelta(minutes=30)).isoformat()),
            _pool("other", "completed", 1, user_id="someone-else", reward_paid=50),
        ]
        overview = PoolService(db).get_overview(profile, now)

        assert [p.id for p in overview.history] == ["p2", "p1"]
        assert overview.current_pool.id == "p2"
        assert overview.stats.total_pools_completed == 1
        assert overview.stats.total_rewards_earned == 10
        assert overview.stats.average_completion_time == 30
        assert overview.stats.pools_failed == 0

    def test_requirements(self, db):
        requirements = PoolService(db).get_requirements()
        assert [r.pool_number for r in requirements] == [1, 2, 3, 4]
        assert requirements[3].rank == "Diamond"

    @pytest.mark.parametrize("data,expected", [
        ({"success": True, "pool_completed": 2}, "Pool 2 completed! You earned your reward!"),
        ({"success": True, "pool_completed": 4, "cycle_completed": True}, "Pool 4 completed. Your cycle is complete"),
        ({"success": True, "pool_expired": 1, "reason": "not enough referrals"}, "Pool 1 expired: not enough referrals"),
        ({"success": True}, "No pool changes"),
    ])
    def test_check_progression_messages(self, db, data, expected):
        db.rpc_results["check_pool_progression"] = data
        result = PoolService(db).check_progression("user-1")
        assert result.message.startswith(expected)
        assert db.rpc_calls == [("check_pool_progression", {"user_id_param": "user-1"})]

    def test_check_progression_failure(self, db):
        db.rpc_results["check_pool_progression"] = {"success": False, "message": "No active pool"}
        with pytest.raises(HTTPException) as exc:
            PoolService(db).check_progression("user-1")
        assert exc.value.status_code == 400
        assert exc.value.detail == "No active pool"

    def test_reset_expired(self, db):
        db.rpc_results["reset_expired_pool"] = {
            "success": True, "new_timer_end": "2024-06-16T12:00:00Z", "required_referrals": 2
        }
        result = PoolService(db).reset_expired("user-1")
        assert "2024-06-16T12:00:00Z" in result.message
        assert "2 active referrals" in result.message

    def test_routes(self, client, db, profile):
        db.rpc_results["check_pool_progression"] = {"success": True}
        assert client.get("/api/v1/pools").json()["current_pool"] is None
        assert len(client.get("/api/v1/pools/requirements").json()) == 4
        assert client.post("/api/v1/pools/check-progression").json()["message"] == "No pool changes"


class TestScheduler:
    def test_checks_each_expired_user_once(self, db):
        real_now = datetime.now(timezone.utc)
        db.tables["pool_progress"] = [
            {"user_id": "u1", "status": "active", "timer_end": (real_now - timedelta(minutes=1)).isoformat()},
            {"user_id": "u1", "status": "active", "timer_end": (real_now - timedelta(minutes=2)).isoformat()},
            {"user_id": "u2", "status": "active", "timer_end": (real_now + timedelta(hours=1)).isoformat()},
            {"user_id": "u3", "status": "completed", "timer_end": (real_now - timedelta(hours=1)).isoformat()},
        ]
        db.rpc_results["check_pool_progression"] = {"success": True, "pool_expired": 1}

        checked = asyncio.run(check_expired_pools(db))

        assert checked == ["u1"]
        assert db.rpc_calls == [("check_pool_progression", {"user_id_param": "u1"})]

    def test_one_failing_user_does_not_stop_the_rest(self, db):
        past = (datetime.now(timezone.utc) - timedelta(minutes=1)).isoformat()
        db.tables["pool_progress"] = [
            {"user_id": "u1", "status": "active", "timer_end": past},
            {"user_id": "u2", "status": "active", "timer_end": past},
        ]
        db.rpc_results["check_pool_progression"] = (
            lambda params: {"success": params["user_id_param"] == "u2"}
        )

        assert asyncio.run(check_expired_pools(db)) == ["u2"]

    def test_query_failure_is_logged(self, db):
        db.failing_tables.add("pool_progress")
        assert asyncio.run(check_expired_pools(db)) == []

    def test_loop_sleeps_between_runs(self):
        check = AsyncMock(return_value=[])
        sleep = AsyncMock(side_effect=asyncio.CancelledError)
        with patch.object(scheduler, "check_expired_pools", check), patch.object(scheduler.asyncio, "sleep", sleep):
            with pytest.raises(asyncio.CancelledError):
                asyncio.run(pool_scheduler_loop())
        check.assert_awaited_once()
        sleep.assert_awaited_once_with(60)
