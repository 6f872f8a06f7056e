# Supabase table: notifications
# Per-user inbox; rows are inserted by database triggers (bonuses, pool events, transfers).

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (references profiles.id)
- type: text
- title: text
- message: text
- data: jsonb (nullable)
- is_read: bool (default false)
- created_at: timestamp
"""
