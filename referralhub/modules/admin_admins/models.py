# Admin accounts and roles
# An admin_users row shares its id with the member's auth user; the role's nested
# permission mapping is what core.dependencies.has_admin_permission walks.

"""
admin_users:
- id (= profiles.id), email, username, role_id, is_active,
  failed_login_attempts, last_login_at, created_at
- joined: role:admin_roles(*)

admin_roles:
- id, name, display_name, description, permissions {group: {action: bool}},
  is_active, created_at
"""

ADMIN_COLUMNS = "*, role:admin_roles(*)"
LOCKOUT_ATTEMPTS = 5
RECENT_LOGIN_HOURS = 24
