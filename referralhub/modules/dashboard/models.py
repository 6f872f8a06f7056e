# Supabase tables read by the user dashboard
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

referral_bonuses:
- id: uuid (primary key)
- user_id: uuid (earner, references profiles.id)
- reference_id: uuid (nullable) - the profile whose action produced the bonus
- bonus_type: text - direct_referral, level_income, rank_sponsor_income, global_turnover_income, team_rewards, recycle_income
- amount: numeric
- description: text (nullable)
- status: text - pending, completed
- created_at: timestamp

pool_progress:
- id: uuid (primary key)
- user_id: uuid (references profiles.id)
- pool_number: int (1-4)
- pool_amount: numeric - reward paid on completion
- time_limit_minutes: int
- direct_referral_requirement: int
- rank_requirement: text
- timer_start, timer_end: timestamp
- started_at, completed_at: timestamp (nullable)
- reward_paid: numeric (default 0)
- status: text - active, completed, failed, expired, expired_needs_referrals
- created_at: timestamp
"""
