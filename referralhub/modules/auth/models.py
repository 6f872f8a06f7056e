# Supabase Auth + profiles
# Registration goes through Supabase's built-in authentication system, then the
# create_user_profile RPC inserts the matching profiles row.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (username / referral data in user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

Tables touched by this module:

login_lookup:
- username: text (unique) - used to reject duplicate usernames before sign-up

profiles (created by RPC create_user_profile):
- id: uuid (references auth.users.id)
- username, email, referral_code (unique), referred_by (sponsor's referral_code)
- rank: text (Starter | Gold | Platinum | Diamond | Ambassador | Admin)
- account_status: text (active | inactive | pending)
- main_wallet_balance, fund_wallet_balance: numeric
- total_direct_referrals, active_direct_referrals, current_pool: int
- activation_date, cycle_completed_at, created_at, updated_at: timestamp

admin_users:
- id: uuid (references auth.users.id)
- email, username, first_name, last_name, is_active, last_login_at
- role_id: uuid (references admin_roles.id)
"""
