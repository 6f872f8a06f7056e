from supabase import Client
from referralhub.modules.notifications.schemas import NotificationList, NotificationResponse
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_notifications(self, user_id: str, limit: int = 20) -> NotificationList:
        try:
            result = self.supabase.table("notifications")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching notifications for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        notifications = [NotificationResponse(**row) for row in result.data or []]
        return NotificationList(
            notifications=notifications,
            unread_count=len([n for n in notifications if not n.is_read]),
        )

    def mark_read(self, user_id: str, notification_id: str) -> bool:
        result = self.supabase.table("notifications")\
            .update({"is_read": True})\
            .eq("id", notification_id)\
            .eq("user_id", user_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Notification not found")
        return True

    def mark_all_read(self, user_id: str) -> int:
        result = self.supabase.table("notifications")\
            .update({"is_read": True})\
            .eq("user_id", user_id)\
            .eq("is_read", False)\
            .execute()
        return len(result.data or [])

    def delete_notification(self, user_id: str, notification_id: str) -> bool:
        result = self.supabase.table("notifications")\
            .delete()\
            .eq("id", notification_id)\
            .eq("user_id", user_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Notification not found")
        return True
