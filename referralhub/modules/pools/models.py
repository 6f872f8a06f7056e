# Supabase table: pool_progress (see dashboard/models.py for the full column list)
# Pool state transitions are owned by the database functions below; this service only
# reads rows and triggers them.

"""
RPCs:
- check_pool_progression(user_id_param) -> {success, pool_completed?, cycle_completed?,
  pool_expired?, reason?, message?}
- reset_expired_pool(user_id_param) -> {success, new_timer_end?, required_referrals?, message?}

Pool tiers (mirrored in POOL_REQUIREMENTS):
- Pool 1: 30 minutes, 1 active direct referral, rank Starter
- Pool 2: 24 hours, 2 active direct referrals, rank Gold
- Pool 3: 5 days, 3 active direct referrals, rank Platinum
- Pool 4: 15 days, 4 active direct referrals, rank Diamond
"""

POOL_REQUIREMENTS = [
    {"pool_number": 1, "time_limit_minutes": 30, "time_limit_text": "30 minutes", "direct_referrals": 1, "rank": "Starter"},
    {"pool_number": 2, "time_limit_minutes": 24 * 60, "time_limit_text": "24 hours", "direct_referrals": 2, "rank": "Gold"},
    {"pool_number": 3, "time_limit_minutes": 5 * 24 * 60, "time_limit_text": "5 days", "direct_referrals": 3, "rank": "Platinum"},
    {"pool_number": 4, "time_limit_minutes": 15 * 24 * 60, "time_limit_text": "15 days", "direct_referrals": 4, "rank": "Diamond"},
]

FAILED_STATUSES = ("failed", "expired", "expired_needs_referrals")
