# Admin activity log viewer
# Rows are written by core.audit.log_admin_activity on every admin mutation.

"""
admin_activity_logs:
- id, admin_user_id, action, resource_type, resource_id, details (jsonb),
  ip_address, created_at
- joined: admin_users!inner(username)
"""

LOG_COLUMNS = "*, admin_users!inner(username)"
MAX_LOGS = 500

CSV_HEADERS = ["Timestamp", "Admin", "Action", "Resource Type", "Resource ID", "IP Address"]
