"""Unit tests for the admin finance overview and report."""

import json

import pytest

from referralhub.modules.admin_finance.service import FinanceService


@pytest.fixture
def ledger(db):
    db.tables.update({
        "referral_bonuses": [
            {"id": "b1", "bonus_type": "direct_referral", "amount": 10, "status": "completed",
             "created_at": "2024-06-10T00:00:00Z", "profiles": {"username": "alice"}},
            {"id": "b2", "bonus_type": "level_income", "amount": 4, "status": "completed",
             "created_at": "2024-06-11T00:00:00Z", "profiles": None},
            {"id": "b3", "bonus_type": "level_income", "amount": 6, "status": "pending",
             "created_at": "2024-06-12T00:00:00Z", "profiles": {"username": "bob"}},
        ],
        "pool_progress": [
            {"status": "completed", "reward_paid": 30},
            {"status": "active", "reward_paid": 0},
        ],
        "fund_wallet_transactions": [
            {"id": "d1", "transaction_type": "deposit", "amount": 100, "created_at": "2024-06-13T00:00:00Z",
             "profiles": {"username": "carol"}},
        ],
        "withdrawals": [
            {"id": "w1", "amount": 25, "status": "pending", "created_at": "2024-06-14T00:00:00Z",
             "profiles": {"username": "alice"}},
        ],
    })
    db.rpc_results["get_admin_dashboard_stats"] = {"total_deposits": 100, "total_withdrawals": 25}
    return db


class TestFinanceService:
    def test_income_streams(self, ledger):
        streams = FinanceService(ledger).get_income_streams()
        assert streams.direct_referral == 10
        assert streams.level_income == 4
        assert streams.pool_income == 30
        assert streams.recycle_income == 0

    def test_income_streams_failure_is_zeroed(self, ledger):
        ledger.failing_tables.add("pool_progress")
        assert FinanceService(ledger).get_income_streams().direct_referral == 0

    def test_recent_transactions(self, ledger):
        recent = FinanceService(ledger).get_recent_transactions()
        assert [t.id for t in recent] == ["w1", "d1", "b3", "b2", "b1"]
        assert recent[0].description == "Withdrawal request"
        assert recent[1].type == "deposit"
        assert recent[3].username == "Unknown"

    def test_report(self, ledger, now):
        report = FinanceService(ledger).build_report(now)
        assert report.generated_at == now
        assert report.summary["total_deposits"] == 100
        assert len(report.recent_transactions) == 5


class TestFinanceRoutes:
    def test_overview(self, client, ledger, admin):
        body = client.get("/api/v1/admin/finance").json()
        assert body["financial_stats"]["total_withdrawals"] == 25
        assert body["income_streams"]["pool_income"] == 30

    def test_report_download(self, client, ledger, admin):
        response = client.get("/api/v1/admin/finance/report")
        assert response.status_code == 200
        assert response.headers["content-disposition"].startswith('attachment; filename="financial_report_')
        assert json.loads(response.content)["income_streams"]["direct_referral"] == 10
