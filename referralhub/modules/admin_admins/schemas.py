from pydantic import BaseModel, EmailStr, Field
from typing import Dict, List, Optional
from datetime import datetime


class AdminRole(BaseModel):
    id: Optional[str] = None
    name: str
    display_name: Optional[str] = None
    description: Optional[str] = None
    permissions: Dict[str, Dict[str, bool]] = {}
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdminAccount(BaseModel):
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    is_active: bool = False
    failed_login_attempts: int = 0
    last_login_at: Optional[datetime] = None
    role: Optional[AdminRole] = None
    created_at: Optional[datetime] = None


class AdminStats(BaseModel):
    total_admins: int
    active_admins: int
    locked_admins: int
    recent_logins: int


class AdminList(BaseModel):
    admins: List[AdminAccount]
    stats: AdminStats


class AdminCreate(BaseModel):
    email: EmailStr
    role_id: str


class AdminStatusUpdate(BaseModel):
    is_active: bool


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1, pattern=r"^[a-z][a-z0-9_]*$")
    display_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    permissions: Dict[str, Dict[str, bool]] = {}
