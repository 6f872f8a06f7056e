# Supabase tables: profiles, referral_bonuses
# The downline is not stored; it is rebuilt from profiles.referred_by, which holds
# the sponsor's referral_code (not the sponsor's id).

"""
Columns read by this module:

profiles:
- id, username, rank, account_status, activation_date, created_at
- referral_code: text (unique)
- referred_by: text (nullable) - sponsor's referral_code
- total_direct_referrals: int

referral_bonuses:
- user_id: uuid - earner
- reference_id: uuid (nullable) - downline member the bonus came from
- amount: numeric
"""

# referred_by codes per IN filter; the filter travels in the GET query string
REFERRAL_CODE_BATCH = 200
# rows per request, at or below the PostgREST max-rows cap
PROFILE_PAGE_SIZE = 1000
