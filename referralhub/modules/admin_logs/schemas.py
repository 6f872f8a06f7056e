from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class ActivityLogFilters(BaseModel):
    days: int = Field(7, ge=1, le=365)
    search: Optional[str] = None
    action: str = "all"
    resource_type: str = "all"


class ActivityLog(BaseModel):
    id: str
    admin_user_id: Optional[str] = None
    admin_username: str = "Unknown"
    action: str
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    details: Dict[str, Any] = {}
    ip_address: Optional[str] = None
    created_at: Optional[datetime] = None


class ActivityLogList(BaseModel):
    logs: List[ActivityLog]
    total: int
    actions: List[str]
    resource_types: List[str]
