from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

NotificationType = Literal["info", "warning", "error", "success"]


class AdminNotificationCreate(BaseModel):
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: NotificationType = "info"
    priority: int = Field(1, ge=1)
    expires_at: Optional[datetime] = None


class AdminNotification(BaseModel):
    id: str
    title: str
    message: str
    type: str = "info"
    priority: int = 1
    is_read: bool = False
    created_by: Optional[str] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AdminNotificationList(BaseModel):
    notifications: List[AdminNotification]
    unread_count: int


class UnreadCount(BaseModel):
    unread_count: int
