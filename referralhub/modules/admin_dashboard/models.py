# Admin overview
# Aggregates come from get_admin_dashboard_stats(); recent activity is read from
# profiles, withdrawals and fund_wallet_transactions (type deposit).

"""
get_admin_dashboard_stats() returns a JSON object such as:
- total_users, active_users, inactive_users, today_registrations
- total_deposits, total_withdrawals, pending_withdrawals, pending_withdrawal_amount
- total_main_balance, total_fund_balance, total_income_distributed
The service passes the object through unchanged.
"""

RECENT_ACTIVITY_PER_SOURCE = 5
RECENT_ACTIVITY_LIMIT = 10
