# Global turnover income
# Members who reach 11 (or 21) active directs within 11 (or 21) days of joining earn
# 1% (or 2%) of daily company turnover for 21 days. Payouts are credited by the
# database; this module only reports them.

"""
RPCs:
- check_global_turnover_eligibility(user_id_param)
  -> {success, level?, percentage?, message}

global_turnover_eligibility:
- id, user_id, level, percentage, status (active | paused | completed),
  start_date, end_date, created_at

referral_bonuses with bonus_type = 'global_turnover_income' hold the daily payouts;
their description carries the percentage and the company turnover, e.g.
"Global turnover 1% of $12,500".
"""

import re

TURNOVER_BONUS_TYPE = "global_turnover_income"
HISTORY_LIMIT = 30

PERCENTAGE_PATTERN = re.compile(r"(\d+)%")
TURNOVER_PATTERN = re.compile(r"\$([0-9,]+)")

# (level, active directs, days from registration, share of daily turnover)
TURNOVER_LEVELS = [
    (11, 11, 11, 1),
    (21, 21, 21, 2),
]
