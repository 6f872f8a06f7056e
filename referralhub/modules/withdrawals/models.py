# Member withdrawal requests
# A request debits the source wallet and queues a pending withdrawals row; payout
# happens off-platform once an admin completes it (see admin_withdrawals).

"""
withdrawal_addresses:
- id, user_id, address, label, is_verified, created_at

withdrawals (member columns):
- id, user_id, amount, fee, net_amount, withdrawal_address, address_label,
  source_wallet (main | fund), status, withdrawal_fee, transfer_fee,
  transaction_hash, admin_notes, processed_at, created_at

fund_wallet_transactions:
- id, user_id, transaction_type, amount, balance_before, balance_after,
  reference_id, description, created_at
"""

BALANCE_FIELDS = {
    "main": "main_wallet_balance",
    "fund": "fund_wallet_balance",
}

HISTORY_LIMIT = 10
