# Supabase table: user_wallets
# Custodial BEP20 deposit addresses, one per user, provisioned by get_or_create_user_wallet.

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (unique, references profiles.id)
- wallet_address: text
- network: text (default 'BSC')
- private_key, mnemonic: text - never returned by this API
- is_monitored: bool
- last_balance_check: timestamp (nullable)
- created_at: timestamp

RPC:
- get_or_create_user_wallet(user_id_param) -> {success, wallet_address?, error?}
"""

SECRET_COLUMNS = ("private_key", "mnemonic", "encrypted_private_key")
