from fastapi import APIRouter, Depends, Query
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.notifications.schemas import NotificationList
from referralhub.modules.notifications.service import NotificationService
from referralhub.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_service_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.get("", response_model=NotificationList)
async def list_notifications(
    limit: int = Query(20, ge=1, le=100),
    user_data: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    return service.list_notifications(user_data["id"], limit)


@router.post("/read-all")
async def mark_all_read(
    user_data: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    updated = service.mark_all_read(user_data["id"])
    return {"message": "All notifications marked as read", "updated": updated}


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    user_data: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    service.mark_read(user_data["id"], notification_id)
    return {"message": "Notification marked as read"}


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(
    notification_id: str,
    user_data: Dict = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service)
):
    service.delete_notification(user_data["id"], notification_id)
