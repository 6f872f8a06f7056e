from supabase import Client
from referralhub.modules.admin_notifications.schemas import (
    AdminNotification, AdminNotificationCreate, AdminNotificationList
)
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class AdminNotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_notifications(self, limit: int = 50) -> AdminNotificationList:
        try:
            result = self.supabase.table("admin_notifications")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
        except Exception as e:
            logger.error(f"Error loading admin notifications: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        notifications = [AdminNotification(**row) for row in result.data or []]
        return AdminNotificationList(
            notifications=notifications,
            unread_count=len([n for n in notifications if not n.is_read]),
        )

    def unread_count(self) -> int:
        result = self.supabase.table("admin_notifications")\
            .select("id", count="exact")\
            .eq("is_read", False)\
            .execute()
        return result.count if result.count is not None else len(result.data or [])

    def create_notification(self, notification: AdminNotificationCreate, admin_id: str) -> AdminNotification:
        data = notification.model_dump(mode="json")
        data["created_by"] = admin_id
        data["is_read"] = False
        try:
            result = self.supabase.table("admin_notifications").insert(data).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create notification")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to create notification: {str(e)}")
        logger.info(f"Admin {admin_id} created {notification.type} notification '{notification.title}'")
        return AdminNotification(**result.data[0])

    def mark_read(self, notification_id: str) -> bool:
        result = self.supabase.table("admin_notifications")\
            .update({"is_read": True})\
            .eq("id", notification_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Notification not found")
        return True

    def delete_notification(self, notification_id: str) -> bool:
        result = self.supabase.table("admin_notifications")\
            .delete()\
            .eq("id", notification_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Notification not found")
        return True
