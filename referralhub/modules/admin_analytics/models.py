# Platform analytics
# Read-only aggregation over profiles, fund_wallet_transactions, withdrawals,
# referral_bonuses and pool_progress. Nothing is persisted.

CHART_COLORS = ["#8884d8", "#82ca9d", "#ffc658", "#ff7300", "#00ff00", "#ff00ff", "#00ffff"]

# (label, lowest count, highest count or None)
REFERRAL_BUCKETS = [
    ("0 Referrals", 0, 0),
    ("1-5 Referrals", 1, 5),
    ("6-10 Referrals", 6, 10),
    ("11-20 Referrals", 11, 20),
    ("21+ Referrals", 21, None),
]
ESTIMATED_INCOME_PER_REFERRER = 25
TOP_PERFORMERS_LIMIT = 10

EXPORTS = {
    "users": (["Date", "New Users", "Active Users"], "user_growth.csv"),
    "revenue": (["Date", "Revenue", "Withdrawals"], "revenue_data.csv"),
    "performers": (["Username", "Income", "Referrals"], "top_performers.csv"),
}
