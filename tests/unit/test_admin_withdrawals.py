"""Unit tests for withdrawal review."""

import pytest
from fastapi import HTTPException

from referralhub.modules.admin_withdrawals.schemas import WithdrawalStatusUpdate
from referralhub.modules.admin_withdrawals.service import AdminWithdrawalService
from tests.fakes import FakeQuery, grant_admin

ALICE = {"username": "alice", "email": "alice@example.com", "rank": "Gold"}
BOB = {"username": "bob", "email": "bob@example.com", "rank": "Starter"}


@pytest.fixture
def queue(db):
    db.tables["withdrawals"] = [
        {"id": "w1", "user_id": "u1", "amount": 100, "fee": 2, "withdrawal_address": "0xaaa", "status": "pending",
         "created_at": "2024-06-14T10:00:00Z", "profiles": ALICE},
        {"id": "w2", "user_id": "u2", "amount": 50, "fee": 1, "withdrawal_address": "0xbbb", "status": "pending",
         "created_at": "2024-06-13T10:00:00Z", "profiles": BOB},
        {"id": "w3", "user_id": "u1", "amount": 200, "fee": 4, "withdrawal_address": "0xaaa", "status": "completed",
         "created_at": "2024-06-10T10:00:00Z", "processed_at": "2024-06-10T14:00:00Z", "profiles": ALICE},
        {"id": "w4", "user_id": "u2", "amount": 80, "fee": 2, "withdrawal_address": "0xbbb", "status": "completed",
         "created_at": "2024-06-09T10:00:00Z", "processed_at": "2024-06-09T12:00:00Z", "profiles": BOB},
        {"id": "w5", "user_id": "u2", "amount": 30, "fee": 1, "withdrawal_address": "0xbbb", "status": "failed",
         "created_at": "2024-06-08T10:00:00Z", "profiles": BOB},
    ]
    return db


class TestListWithdrawals:
    def test_pending_tab_by_default(self, queue):
        listing = AdminWithdrawalService(queue).list_withdrawals()
        assert [w.id for w in listing.withdrawals] == ["w1", "w2"]
        assert listing.withdrawals[0].username == "alice"

    def test_search_by_requester(self, queue):
        listing = AdminWithdrawalService(queue).list_withdrawals(tab="all", search="BOB@")
        assert [w.id for w in listing.withdrawals] == ["w2", "w4", "w5"]

    def test_search_by_address(self, queue):
        listing = AdminWithdrawalService(queue).list_withdrawals(tab="completed", search="0xaa")
        assert [w.id for w in listing.withdrawals] == ["w3"]

    def test_stats_cover_every_withdrawal(self, queue):
        stats = AdminWithdrawalService(queue).list_withdrawals(tab="failed").stats
        assert stats.total_pending == 2
        assert stats.total_completed == 2
        assert stats.total_failed == 1
        assert stats.total_amount_pending == 150
        assert stats.total_amount_completed == 280
        assert stats.total_fees_collected == 6
        assert stats.avg_processing_time == 3


class TestUpdateStatus:
    def test_complete_with_hash(self, queue):
        update = WithdrawalStatusUpdate(status="completed", transaction_hash="0xfeed", admin_notes="paid")
        updated = AdminWithdrawalService(queue).update_status("w1", update, "admin-1")
        assert updated.status == "completed"
        assert updated.transaction_hash == "0xfeed"
        assert updated.processed_at is not None

        log = queue.rows("admin_activity_logs")[0]
        assert log["action"] == "UPDATE_WITHDRAWAL_STATUS"
        assert log["resource_type"] == "withdrawal"
        assert log["details"] == {
            "old_status": "pending",
            "new_status": "completed",
            "notes": "paid",
            "transaction_hash": "0xfeed",
        }

    def test_processing_then_failed(self, queue):
        service = AdminWithdrawalService(queue)
        service.update_status("w2", WithdrawalStatusUpdate(status="processing"), "admin-1")
        failed = service.update_status("w2", WithdrawalStatusUpdate(status="failed", admin_notes="bad address"), "admin-1")
        assert failed.status == "failed"
        assert failed.admin_notes == "bad address"

    def test_finished_withdrawals_are_final(self, queue):
        with pytest.raises(HTTPException) as exc:
            AdminWithdrawalService(queue).update_status("w3", WithdrawalStatusUpdate(status="pending"), "admin-1")
        assert exc.value.status_code == 400
        assert exc.value.detail == "Cannot change withdrawal status from completed to pending"
        assert queue.rows("admin_activity_logs") == []

    def test_concurrent_completion_is_not_overwritten(self, queue, monkeypatch):
        original_update = FakeQuery._execute_update

        def completed_by_another_admin(query):
            next(r for r in queue.rows("withdrawals") if r["id"] == "w1")["status"] = "completed"
            return original_update(query)

        monkeypatch.setattr(FakeQuery, "_execute_update", completed_by_another_admin)
        with pytest.raises(HTTPException) as exc:
            AdminWithdrawalService(queue).update_status("w1", WithdrawalStatusUpdate(status="cancelled"), "admin-1")
        assert exc.value.status_code == 409
        assert next(r for r in queue.rows("withdrawals") if r["id"] == "w1")["status"] == "completed"
        assert queue.rows("admin_activity_logs") == []

    def test_unknown_withdrawal(self, queue):
        with pytest.raises(HTTPException) as exc:
            AdminWithdrawalService(queue).update_status("nope", WithdrawalStatusUpdate(status="completed"), "admin-1")
        assert exc.value.status_code == 404


class TestWithdrawalRoutes:
    def test_list(self, client, queue, admin):
        body = client.get("/api/v1/admin/withdrawals", params={"tab": "all", "status": "completed"}).json()
        assert [w["id"] for w in body["withdrawals"]] == ["w3", "w4"]

    def test_view_only_admin_cannot_approve(self, client, queue, user):
        grant_admin(queue, user["id"], grants=["finances.view"])
        assert client.get("/api/v1/admin/withdrawals").status_code == 200
        response = client.patch("/api/v1/admin/withdrawals/w1", json={"status": "completed"})
        assert response.status_code == 403

    def test_rejects_unknown_status(self, client, queue, admin):
        response = client.patch("/api/v1/admin/withdrawals/w1", json={"status": "approved"})
        assert response.status_code == 422
