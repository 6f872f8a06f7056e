from pydantic import BaseModel
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime


class RecentActivity(BaseModel):
    id: str
    type: Literal["registration", "withdrawal", "deposit"]
    description: str
    created_at: Optional[datetime] = None
    username: Optional[str] = None
    amount: Optional[float] = None
    status: Optional[str] = None


class AdminDashboardResponse(BaseModel):
    stats: Dict[str, Any]
    recent_activity: List[RecentActivity]
