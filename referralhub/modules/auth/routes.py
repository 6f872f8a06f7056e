from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, MeResponse
)
from referralhub.modules.auth.service import AuthService
from referralhub.core.dependencies import (
    get_auth_service, get_current_user, get_access_cache, load_profile, load_admin
)
from referralhub.config.admin_roles_config import flatten_permissions
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])

# Security scheme for JWT Bearer token
security = HTTPBearer()


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user (optionally under a sponsor's referral code)"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_me(
    current_user: Dict = Depends(get_current_user),
    supabase: Client = Depends(get_service_supabase),
    cache: Dict = Depends(get_access_cache),
):
    """Current user, their profile and (for admins) the granted permission paths."""
    profile = load_profile(current_user["id"], supabase, cache)
    admin = load_admin(current_user["id"], supabase, cache)
    is_admin = bool(admin and admin.get("is_active"))
    role = (admin or {}).get("role") or {}
    return MeResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        profile=profile,
        is_admin=is_admin,
        admin_role=role.get("name") if is_admin else None,
        permissions=flatten_permissions(role.get("permissions")) if is_admin else [],
    )
