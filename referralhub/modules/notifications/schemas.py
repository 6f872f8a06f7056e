from pydantic import BaseModel
from typing import Any, List, Optional
from datetime import datetime


class NotificationResponse(BaseModel):
    id: str
    type: Optional[str] = None
    title: str
    message: str
    data: Optional[Any] = None
    is_read: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class NotificationList(BaseModel):
    notifications: List[NotificationResponse]
    unread_count: int
