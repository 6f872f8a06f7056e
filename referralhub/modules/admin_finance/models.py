# Finance overview
# Platform totals come from get_admin_dashboard_stats(); income streams and recent
# transactions are aggregated from referral_bonuses, pool_progress,
# fund_wallet_transactions and withdrawals.

# bonus_type values reported as separate income streams
BONUS_STREAMS = (
    "direct_referral",
    "level_income",
    "rank_sponsor_income",
    "global_turnover_income",
    "team_rewards",
    "recycle_income",
)

RECENT_BONUSES = 10
RECENT_DEPOSITS = 5
RECENT_WITHDRAWALS = 5
RECENT_TRANSACTIONS_LIMIT = 15
REPORT_TRANSACTIONS_LIMIT = 10
