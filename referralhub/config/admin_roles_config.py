"""
Admin Roles Configuration
This config defines the permission groups available to admin panel users and the
default roles built from them. Used by the seed script to populate admin_roles.
"""

# Define permission groups and their actions
PERMISSION_GROUPS = {
    "users": {
        "actions": ["view", "edit", "manage_balances"],
        "description": "User account management"
    },
    "finances": {
        "actions": ["view", "approve_withdrawals", "view_reports"],
        "description": "Balances, withdrawals and financial reporting"
    },
    "system": {
        "actions": ["view_settings", "edit_settings", "view_logs", "manage_admins"],
        "description": "Platform settings, gas, activity logs and admin accounts"
    },
    "analytics": {
        "actions": ["view_all", "export_data"],
        "description": "Platform analytics and data export"
    },
    "notifications": {
        "actions": ["create", "manage"],
        "description": "Admin notifications"
    }
}

# Role definitions: which "group.action" paths each role is granted
ROLE_TYPES = {
    "super_admin": {
        "display_name": "Super Administrator",
        "description": "Full system access",
        "grants": "*"
    },
    "sub_admin": {
        "display_name": "Sub Administrator",
        "description": "Limited access",
        "grants": [
            "users.view",
            "users.edit",
            "finances.view",
            "finances.view_reports",
            "system.view_settings",
        ]
    }
}


def build_permissions(grants) -> dict:
    """Expand a grant list (or "*") into the nested {group: {action: bool}} mapping stored on admin_roles"""
    permissions = {}
    for group, config in PERMISSION_GROUPS.items():
        permissions[group] = {}
        for action in config["actions"]:
            permissions[group][action] = grants == "*" or f"{group}.{action}" in grants
    return permissions


def flatten_permissions(permissions: dict) -> list:
    """Return the sorted list of granted "group.action" paths from a nested mapping"""
    granted = []
    for group, actions in (permissions or {}).items():
        if not isinstance(actions, dict):
            continue
        for action, allowed in actions.items():
            if allowed is True:
                granted.append(f"{group}.{action}")
    return sorted(granted)


# Generate role matrix
def get_role_matrix():
    """
    Returns the rows to upsert into admin_roles
    Format: [
        {
            "name": "super_admin",
            "display_name": "Super Administrator",
            "description": "...",
            "permissions": {"users": {"view": True, ...}, ...},
            "is_active": True
        },
        ...
    ]
    """
    roles = []
    for role_name, role_config in ROLE_TYPES.items():
        roles.append({
            "name": role_name,
            "display_name": role_config["display_name"],
            "description": role_config["description"],
            "permissions": build_permissions(role_config["grants"]),
            "is_active": True
        })
    return roles


ROLE_MATRIX = get_role_matrix()
