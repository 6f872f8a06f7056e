"""Unit tests for admin analytics and exports."""

import pytest
from fastapi import HTTPException

from referralhub.modules.admin_analytics.service import AnalyticsService, bonus_type_label, referral_bucket
from tests.fakes import grant_admin


@pytest.fixture
def platform(db):
    db.tables.update({
        "profiles": [
            {"id": "u1", "username": "alice", "created_at": "2024-06-10T01:00:00Z", "account_status": "active",
             "total_direct_referrals": 0, "main_wallet_balance": 10},
            {"id": "u2", "username": "bob", "created_at": "2024-06-10T05:00:00Z", "account_status": "inactive",
             "total_direct_referrals": 3, "main_wallet_balance": 300},
            {"id": "u3", "username": "carol", "created_at": "2024-06-12T00:00:00Z", "account_status": "active",
             "total_direct_referrals": 25, "main_wallet_balance": 120.5},
            {"id": "u4", "username": "old", "created_at": "2023-01-01T00:00:00Z", "account_status": "active",
             "total_direct_referrals": 6, "main_wallet_balance": 0},
        ],
        "fund_wallet_transactions": [
            {"transaction_type": "deposit", "amount": 100, "created_at": "2024-06-10T02:00:00Z"},
            {"transaction_type": "activation", "amount": -21, "created_at": "2024-06-10T02:00:00Z"},
        ],
        "withdrawals": [
            {"status": "completed", "amount": 40, "created_at": "2024-06-11T00:00:00Z"},
            {"status": "pending", "amount": 99, "created_at": "2024-06-11T00:00:00Z"},
        ],
        "referral_bonuses": [
            {"bonus_type": "level_income", "amount": 5, "status": "completed", "created_at": "2024-06-10T00:00:00Z"},
            {"bonus_type": "level_income", "amount": 7, "status": "completed", "created_at": "2024-06-11T00:00:00Z"},
            {"bonus_type": "direct_referral_bonus", "amount": 20, "status": "completed", "created_at": "2024-06-11T00:00:00Z"},
        ],
        "pool_progress": [
            {"pool_number": 2, "status": "completed", "reward_paid": 30},
            {"pool_number": 1, "status": "completed", "reward_paid": 10},
            {"pool_number": 1, "status": "completed", "reward_paid": 10},
            {"pool_number": 3, "status": "active", "reward_paid": 0},
        ],
    })
    return db


class TestLabels:
    def test_bonus_type_label(self):
        assert bonus_type_label("level_income") == "Level Income"
        assert bonus_type_label("direct_referral_bonus") == "Direct Referral_bonus"

    @pytest.mark.parametrize("count,label", [
        (0, "0 Referrals"), (1, "1-5 Referrals"), (5, "1-5 Referrals"), (6, "6-10 Referrals"),
        (20, "11-20 Referrals"), (21, "21+ Referrals"),
    ])
    def test_referral_bucket(self, count, label):
        assert referral_bucket(count) == label


class TestAnalytics:
    def test_series(self, platform, now):
        data = AnalyticsService(platform).get_analytics(30, now)

        assert [(p.date, p.users, p.active) for p in data.user_growth] == [
            ("2024-06-10", 2, 1), ("2024-06-12", 1, 1)
        ]
        assert [(p.date, p.revenue, p.withdrawals) for p in data.revenue_data] == [
            ("2024-06-10", 100, 0), ("2024-06-11", 0, 40)
        ]
        assert [(s.name, s.value) for s in data.income_streams] == [
            ("Level Income", 12), ("Direct Referral_bonus", 20)
        ]
        assert [(p.pool, p.completions, p.rewards) for p in data.pool_performance] == [
            ("Pool 1", 2, 20), ("Pool 2", 1, 30)
        ]

    def test_referral_distribution_covers_every_profile(self, platform, now):
        buckets = {b.level: b for b in AnalyticsService(platform).get_analytics(30, now).referral_stats}
        assert buckets["0 Referrals"].count == 1
        assert buckets["1-5 Referrals"].count == 1
        assert buckets["6-10 Referrals"].count == 1
        assert buckets["21+ Referrals"].count == 1
        assert buckets["21+ Referrals"].income == 25

    def test_top_performers_by_balance(self, platform, now):
        performers = AnalyticsService(platform).get_analytics(30, now).top_performers
        assert [p.username for p in performers] == ["bob", "carol", "alice", "old"]

    def test_failing_section_is_empty(self, platform, now):
        platform.failing_tables.add("withdrawals")
        data = AnalyticsService(platform).get_analytics(30, now)
        assert data.revenue_data == []
        assert len(data.user_growth) == 2


class TestExports:
    def test_revenue_csv(self, platform, now):
        content, filename = AnalyticsService(platform).export("revenue", 30, now)
        assert filename == "revenue_data.csv"
        assert content.splitlines() == ["Date,Revenue,Withdrawals", "2024-06-10,100,0", "2024-06-11,0,40"]

    def test_performers_csv(self, platform, now):
        content, _ = AnalyticsService(platform).export("performers", 30, now)
        assert content.splitlines()[2] == "carol,120.5,25"

    def test_unknown_export(self, platform):
        with pytest.raises(HTTPException) as exc:
            AnalyticsService(platform).export("secrets")
        assert exc.value.status_code == 404

    def test_export_requires_export_permission(self, client, platform, user):
        grant_admin(platform, user["id"], grants=["analytics.view_all"])
        assert client.get("/api/v1/admin/analytics").status_code == 200
        assert client.get("/api/v1/admin/analytics/export/users").status_code == 403

    def test_export_route(self, client, platform, admin):
        response = client.get("/api/v1/admin/analytics/export/users")
        assert response.status_code == 200
        assert response.headers["content-disposition"] == 'attachment; filename="user_growth.csv"'
