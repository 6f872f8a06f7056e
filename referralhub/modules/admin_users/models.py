# Admin user management over the profiles table (columns in auth/models.py)
# Balance adjustments go through admin_update_user_balance so the ledger stays consistent.

"""
RPC:
- admin_update_user_balance(admin_id_param, user_id_param, wallet_type_param,
  amount_param, reason_param) -> {success?, new_balance, message?}
"""

USER_COLUMNS = (
    "id, username, email, rank, account_status, main_wallet_balance, fund_wallet_balance, "
    "total_direct_referrals, active_direct_referrals, current_pool, referral_code, referred_by, "
    "created_at, activation_date, cycle_completed_at"
)

SORT_FIELDS = (
    "created_at", "username", "email", "rank", "account_status", "main_wallet_balance",
    "fund_wallet_balance", "total_direct_referrals", "activation_date",
)

CSV_HEADERS = ["Username", "Email", "Rank", "Status", "Main Balance", "Fund Balance", "Referrals", "Created"]
