from fastapi import APIRouter, Depends, Query
from referralhub.database.supabase_client import get_service_supabase
from referralhub.modules.admin_notifications.schemas import (
    AdminNotification, AdminNotificationCreate, AdminNotificationList, UnreadCount
)
from referralhub.modules.admin_notifications.service import AdminNotificationService
from referralhub.core.dependencies import require_admin_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/admin/notifications", tags=["admin"])


def get_admin_notification_service(supabase: Client = Depends(get_service_supabase)) -> AdminNotificationService:
    return AdminNotificationService(supabase)


@router.get("", response_model=AdminNotificationList)
async def list_admin_notifications(
    limit: int = Query(50, ge=1, le=200),
    admin: Dict = Depends(require_admin_permission("notifications.manage")),
    service: AdminNotificationService = Depends(get_admin_notification_service)
):
    return service.list_notifications(limit)


@router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(
    admin: Dict = Depends(require_admin_permission("notifications.manage")),
    service: AdminNotificationService = Depends(get_admin_notification_service)
):
    return UnreadCount(unread_count=service.unread_count())


@router.post("", response_model=AdminNotification, status_code=201)
async def create_admin_notification(
    notification: AdminNotificationCreate,
    admin: Dict = Depends(require_admin_permission("notifications.create")),
    service: AdminNotificationService = Depends(get_admin_notification_service)
):
    return service.create_notification(notification, admin["id"])


@router.post("/{notification_id}/read")
async def mark_admin_notification_read(
    notification_id: str,
    admin: Dict = Depends(require_admin_permission("notifications.manage")),
    service: AdminNotificationService = Depends(get_admin_notification_service)
):
    service.mark_read(notification_id)
    return {"message": "Notification marked as read"}


@router.delete("/{notification_id}", status_code=204)
async def delete_admin_notification(
    notification_id: str,
    admin: Dict = Depends(require_admin_permission("notifications.manage")),
    service: AdminNotificationService = Depends(get_admin_notification_service)
):
    service.delete_notification(notification_id)
