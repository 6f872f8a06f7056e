# Account activation and recycle (reactivation)
# Both transitions run inside database functions that move the fund wallet balance
# and distribute income up the sponsor chain.

"""
RPCs:
- process_account_activation(user_id_param)
  -> {success, message?, income_distributed?}
- process_account_reactivation(user_id_param)
  -> {success, message?, recycle_bonus?}

profiles (columns read here):
- account_status (active | inactive), fund_wallet_balance, cycle_completed_at

referral_bonuses with bonus_type = 'recycle_income' record each reactivation.
"""

RECYCLE_BONUS_TYPE = "recycle_income"
