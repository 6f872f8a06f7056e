from supabase import Client
from referralhub.config.admin_roles_config import PERMISSION_GROUPS, build_permissions, flatten_permissions
from referralhub.core.audit import log_admin_activity
from referralhub.core.utils import fetch_single, parse_timestamp, utcnow
from referralhub.modules.admin_admins.models import ADMIN_COLUMNS, LOCKOUT_ATTEMPTS, RECENT_LOGIN_HOURS
from referralhub.modules.admin_admins.schemas import (
    AdminAccount, AdminCreate, AdminList, AdminRole, AdminStats, AdminStatusUpdate, RoleCreate
)
from fastapi import HTTPException
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


def normalize_permissions(permissions: Dict[str, Dict[str, bool]]) -> Dict[str, Dict[str, bool]]:
    """Check every group.action against PERMISSION_GROUPS and fill the rest with False"""
    unknown = [
        f"{group}.{action}"
        for group, actions in permissions.items()
        for action in actions
        if action not in PERMISSION_GROUPS.get(group, {}).get("actions", [])
    ]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown permissions: {', '.join(sorted(unknown))}")
    return build_permissions(flatten_permissions(permissions))


def compute_admin_stats(admins: List[AdminAccount], now: datetime) -> AdminStats:
    since = now - timedelta(hours=RECENT_LOGIN_HOURS)
    return AdminStats(
        total_admins=len(admins),
        active_admins=len([a for a in admins if a.is_active]),
        locked_admins=len([a for a in admins if a.failed_login_attempts >= LOCKOUT_ATTEMPTS]),
        recent_logins=len([
            a for a in admins
            if a.last_login_at and parse_timestamp(a.last_login_at) > since
        ]),
    )


class AdminAccountService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_admins(self, now: Optional[datetime] = None) -> AdminList:
        try:
            result = self.supabase.table("admin_users")\
                .select(ADMIN_COLUMNS)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading admin users: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load data: {str(e)}")
        admins = [AdminAccount(**row) for row in result.data or []]
        return AdminList(admins=admins, stats=compute_admin_stats(admins, now or utcnow()))

    def list_roles(self) -> List[AdminRole]:
        try:
            result = self.supabase.table("admin_roles")\
                .select("*")\
                .eq("is_active", True)\
                .order("name")\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to load admin roles: {str(e)}")
        return [AdminRole(**row) for row in result.data or []]

    def create_role(self, role: RoleCreate, admin_id: str) -> AdminRole:
        permissions = normalize_permissions(role.permissions)
        try:
            existing = self.supabase.table("admin_roles")\
                .select("id")\
                .eq("name", role.name)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=409, detail=f"Role {role.name} already exists")
            result = self.supabase.table("admin_roles").insert({
                "name": role.name,
                "display_name": role.display_name,
                "description": role.description,
                "permissions": permissions,
                "is_active": True,
            }).execute()
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to create role: {str(e)}")

        created = result.data[0]
        log_admin_activity(self.supabase, admin_id, "CREATE_ADMIN_ROLE", "admin_role", created["id"], {
            "name": role.name,
            "permissions": flatten_permissions(permissions),
        })
        logger.info(f"Admin {admin_id} created role {role.name}")
        return AdminRole(**created)

    def _load_admin(self, admin_user_id: str) -> Optional[Dict[str, Any]]:
        return fetch_single(
            self.supabase.table("admin_users")
            .select(ADMIN_COLUMNS)
            .eq("id", admin_user_id)
        )

    def create_admin(self, request: AdminCreate, admin_id: str) -> AdminAccount:
        """Grant admin access to an existing member account"""
        try:
            profile = fetch_single(
                self.supabase.table("profiles")
                .select("id, email, username")
                .eq("email", request.email)
            )
            if not profile:
                raise HTTPException(status_code=404, detail="No user with that email")
            role = fetch_single(
                self.supabase.table("admin_roles")
                .select("*")
                .eq("id", request.role_id)
                .eq("is_active", True)
            )
            if not role:
                raise HTTPException(status_code=404, detail="Role not found")
            if self._load_admin(profile["id"]):
                raise HTTPException(status_code=409, detail="User is already an admin")

            self.supabase.table("admin_users").insert({
                "id": profile["id"],
                "email": profile.get("email"),
                "username": profile.get("username"),
                "role_id": role["id"],
                "is_active": True,
                "failed_login_attempts": 0,
            }).execute()
            created = self._load_admin(profile["id"])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating admin for {request.email}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to create admin: {str(e)}")

        log_admin_activity(self.supabase, admin_id, "CREATE_ADMIN_USER", "admin_user", profile["id"], {
            "email": profile.get("email"),
            "role": role.get("name"),
        })
        logger.info(f"Admin {admin_id} granted {role.get('name')} to {profile['id']}")
        return AdminAccount(**(created or {}))

    def update_status(self, admin_user_id: str, update: AdminStatusUpdate, admin_id: str) -> AdminAccount:
        if admin_user_id == admin_id:
            raise HTTPException(status_code=400, detail="You cannot change your own admin status")
        try:
            current = self._load_admin(admin_user_id)
            if not current:
                raise HTTPException(status_code=404, detail="Admin not found")
            self.supabase.table("admin_users")\
                .update({"is_active": update.is_active})\
                .eq("id", admin_user_id)\
                .execute()
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to update admin: {str(e)}")

        log_admin_activity(self.supabase, admin_id, "UPDATE_ADMIN_STATUS", "admin_user", admin_user_id, {
            "old_status": current.get("is_active"),
            "new_status": update.is_active,
        })
        return AdminAccount(**{**current, "is_active": update.is_active})
