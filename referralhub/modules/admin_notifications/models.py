# Supabase table: admin_notifications
# Broadcast notices for the admin console; not tied to a single recipient.

"""
admin_notifications:
- id: uuid
- title: text
- message: text
- type: text (info, warning, error, success)
- priority: int (1 highest)
- is_read: bool
- created_by: uuid (admin_users.id)
- expires_at: timestamptz, nullable
- created_at: timestamptz
"""

NOTIFICATION_TYPES = ("info", "warning", "error", "success")
