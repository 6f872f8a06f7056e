"""
admin_activity_logs writer shared by the admin mutation endpoints

Table columns: id, admin_user_id, action, resource_type, resource_id, details (jsonb), created_at
"""

import logging
from typing import Any, Dict, Optional

from supabase import Client

logger = logging.getLogger(__name__)


def log_admin_activity(
    supabase: Client,
    admin_id: str,
    action: str,
    resource_type: str,
    resource_id: str,
    details: Optional[Dict[str, Any]] = None,
) -> bool:
    """Record an admin action. The mutation it describes has already happened, so a
    failed insert is logged rather than raised."""
    try:
        supabase.table("admin_activity_logs").insert({
            "admin_user_id": admin_id,
            "action": action,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "details": details or {},
        }).execute()
        return True
    except Exception as e:
        logger.error(f"Failed to write admin activity log {action} for {resource_type} {resource_id}: {e}")
        return False
