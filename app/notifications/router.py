"""
Notification Router
"""

from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from app.auth.dependencies import get_current_user
from app.auth.models import CurrentUser
from database.supabase_client import get_db
from .models import NotificationList
from .service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_notification_service(
    user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_db)
) -> NotificationService:
    return NotificationService(user.id, supabase)


@router.get("", response_model=NotificationList)
async def list_notifications(service: NotificationService = Depends(get_notification_service)):
    """내 알림 + 안 읽은 개수"""
    notifications = await service.fetch_notifications()
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return NotificationList(notifications=notifications, unread_count=service.unread_count)


@router.post("/read-all")
async def mark_all_as_read(service: NotificationService = Depends(get_notification_service)):
    """전체 읽음"""
    updated = await service.mark_all_as_read()
    if updated < 0:
        raise HTTPException(status_code=500, detail=service.error or "읽음 처리에 실패했습니다")
    return {"updated": updated}


@router.post("/{notification_id}/read")
async def mark_as_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    """읽음 처리"""
    if not await service.mark_as_read(notification_id):
        raise HTTPException(status_code=404, detail="알림을 찾을 수 없습니다")
    return {"notification_id": notification_id, "is_read": True}


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    """알림 삭제"""
    if not await service.delete_notification(notification_id):
        raise HTTPException(status_code=404, detail="알림을 찾을 수 없습니다")
    return {"message": "삭제되었습니다", "notification_id": notification_id}
