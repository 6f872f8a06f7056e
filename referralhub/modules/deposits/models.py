# BEP20 USDT deposits
# Members send USDT to their custodial wallet (wallets module); a confirmed incoming
# transfer is recorded once in deposits and credited to the fund wallet.

"""
deposits:
- id, user_id, wallet_address, amount, status (pending | confirmed | failed),
  transaction_hash, confirmations, block_number, confirmed_at, created_at
  (transaction_hash is expected to be unique per user)

fund_wallet_transactions gets a transaction_type = 'deposit' row per credit.
"""

HISTORY_LIMIT = 10
