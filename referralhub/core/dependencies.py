"""
Core dependencies for route protection and admin permission checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from referralhub.database.supabase_client import get_supabase, get_service_supabase
from referralhub.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for the caller's profile/admin rows."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_access_cache(request: Request) -> Dict[str, Any]:
    """Dependency that returns the request-scoped access cache (profile/admin rows)."""
    return _get_request_cache(request)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    data_client: Client = Depends(get_service_supabase)
) -> AuthService:
    return AuthService(supabase, data_client)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    return auth_service.get_current_user(token)


def load_profile(user_id: str, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> Optional[dict]:
    """Return the profiles row for user_id, or None. Uses request-scoped cache when provided."""
    if cache is not None and "profile" in cache:
        return cache["profile"]
    result = supabase.table("profiles")\
        .select("*")\
        .eq("id", user_id)\
        .execute()
    profile = result.data[0] if result.data else None
    if cache is not None:
        cache["profile"] = profile
    return profile


def get_current_profile(
    request: Request,
    user_data: dict = Depends(get_current_user),
    supabase: Client = Depends(get_service_supabase)
) -> dict:
    """Dependency returning the caller's profile row (404 when the profile was never created)"""
    try:
        profile = load_profile(user_data["id"], supabase, _get_request_cache(request))
    except Exception as e:
        logger.error(f"Error loading profile for {user_data['id']}: {e}")
        raise HTTPException(status_code=500, detail="Failed to load profile")
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


def load_admin(user_id: str, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> Optional[dict]:
    """Return the admin_users row (with nested role) for user_id, or None. Uses request-scoped cache when provided."""
    if cache is not None and "admin" in cache:
        return cache["admin"]
    try:
        result = supabase.table("admin_users")\
            .select("*, role:admin_roles(*)")\
            .eq("id", user_id)\
            .execute()
        admin = result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Error loading admin record for {user_id}: {e}")
        admin = None
    if cache is not None:
        cache["admin"] = admin
    return admin


def has_admin_permission(admin: Optional[dict], permission: str) -> bool:
    """Walk a dotted path (e.g. "finances.approve_withdrawals") through the role's permission mapping.
    Only an exact True leaf grants access."""
    if not admin:
        return False
    role = admin.get("role") or {}
    if role.get("is_active") is False:
        return False
    current: Any = role.get("permissions")
    if not isinstance(current, dict):
        return False
    for part in permission.split("."):
        if not isinstance(current, dict) or part not in current:
            return False
        current = current[part]
    return current is True


def get_current_admin(
    request: Request,
    user_data: dict = Depends(get_current_user),
    supabase: Client = Depends(get_service_supabase)
) -> dict:
    """Dependency returning the caller's active admin record"""
    admin = load_admin(user_data["id"], supabase, _get_request_cache(request))
    if not admin or not admin.get("is_active", False):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return admin


def require_admin_permission(required_permission: str):
    """Factory function to create admin permission check dependency"""
    def check_permission(admin: dict = Depends(get_current_admin)) -> dict:
        if not has_admin_permission(admin, required_permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {required_permission}"
            )
        return admin
    return check_permission
