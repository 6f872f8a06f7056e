# Rank ladder and team-size rewards
# profiles.rank is promoted by the database; this module only reports progress.

"""
team_reward_claims:
- id: uuid (primary key)
- user_id: uuid (references profiles.id)
- team_size: int - tier that was claimed (one claim per tier)
- reward_type: text - fast_track | standard
- amount: numeric
- created_at: timestamp

RPC:
- check_team_rewards(user_id_param) -> {success, amount?, message?}
"""

RANKS = [
    {
        "rank": "Starter",
        "requirements": {"direct_referrals": 0},
        "benefits": ["Access to Pool 1", "Basic income streams", "Platform access"],
    },
    {
        "rank": "Gold",
        "requirements": {"direct_referrals": 1, "pools_completed": 1},
        "benefits": ["Access to Pool 2", "Level income eligibility", "Rank sponsor bonuses"],
    },
    {
        "rank": "Platinum",
        "requirements": {"direct_referrals": 2, "pools_completed": 2},
        "benefits": ["Access to Pool 3", "Enhanced level income", "Team building bonuses"],
    },
    {
        "rank": "Diamond",
        "requirements": {"direct_referrals": 4, "pools_completed": 4},
        "benefits": ["Access to Pool 4", "Maximum pool rewards", "Cycle completion eligibility"],
    },
    {
        "rank": "Ambassador",
        "requirements": {"direct_referrals": 10, "team_size": 50},
        "benefits": ["Global turnover eligibility", "Leadership bonuses", "Special recognition"],
    },
]

# (team size, (fast track amount, days), (standard amount, days))
TEAM_REWARD_TIERS = [
    (25, (20, 10), (10, 25)),
    (50, (50, 10), (20, 20)),
    (100, (100, 15), (40, 30)),
    (250, (300, 25), (120, 50)),
    (500, (700, 40), (300, 80)),
    (1000, (1500, 60), (600, 120)),
    (2500, (5000, 90), (2000, 180)),
    (50000, (15000, 120), (8000, 220)),
    (100000, (35000, 150), (18000, 400)),
]
