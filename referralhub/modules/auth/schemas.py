from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    username: str = Field(min_length=1)
    referral_code: Optional[str] = None  # sponsor's code


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    username: str
    referral_code: str
    message: str


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    profile: Optional[Dict[str, Any]] = None
    is_admin: bool = False
    admin_role: Optional[str] = None
    permissions: List[str] = []
