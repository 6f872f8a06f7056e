# Unified transaction ledger
# There is no ledger table: rows are merged from several sources on every request.

"""
Sources (all scoped to the caller's user_id):

referral_bonuses     -> type = bonus_type, income, main_wallet
pool_progress        -> status completed only, type pool_reward, amount reward_paid, main_wallet
fund_wallet_transactions:
- id, user_id, transaction_type (deposit, activation, ...), amount (signed), description, created_at
                     -> income when amount > 0 else expense, fund_wallet
withdrawals:
- id, user_id, amount, fee, net_amount, withdrawal_address, address_label, status,
  transaction_hash, admin_notes, processed_at, created_at
                     -> type withdrawal, negative amount, expense, main_wallet
RPC get_user_transfer_history(user_id_param, limit_param):
- id, sender_id, receiver_id, sender_username, receiver_username, amount, fee,
  net_amount, description, status, is_sender, created_at
                     -> p2p_send (-amount) / p2p_receive (net_amount), transfer, fund_wallet
"""

CSV_HEADERS = ["Date", "Type", "Description", "Amount", "Category", "Status", "Source"]
