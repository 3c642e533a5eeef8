"""
Notification Service

내 알림 조회/읽음 처리/삭제
모든 쿼리는 user_id로 한정한다.
"""

from datetime import datetime, timezone
from typing import Optional, List
from loguru import logger
from supabase import Client

from database.supabase_client import get_supabase_client
from .models import Notification

NOTIFICATIONS_TABLE = "notifications"


class NotificationService:
    """알림 서비스"""

    def __init__(self, user_id: str, supabase: Optional[Client] = None):
        self.user_id = user_id
        self.supabase = supabase or get_supabase_client()
        self.notifications: List[Notification] = []
        self.error: Optional[str] = None

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    async def fetch_notifications(self) -> List[Notification]:
        """내 알림 (최신순)"""
        try:
            result = self.supabase.table(NOTIFICATIONS_TABLE).select("*").eq(
                "user_id", self.user_id
            ).order("created_at", desc=True).execute()
            self.notifications = [Notification(**row) for row in (result.data or [])]
            self.error = None
        except Exception as e:
            logger.error(f"알림 조회 오류: user={self.user_id}: {e}")
            self.error = str(e) or "Failed to fetch notifications"
        return self.notifications

    async def mark_as_read(self, notification_id: str) -> bool:
        """알림 하나 읽음 처리"""
        try:
            result = self.supabase.table(NOTIFICATIONS_TABLE).update({
                "is_read": True,
                "updated_at": datetime.now(timezone.utc).isoformat()
            }).eq("id", notification_id).eq("user_id", self.user_id).execute()
        except Exception as e:
            logger.error(f"알림 읽음 처리 오류: notification={notification_id}: {e}")
            self.error = str(e)
            return False

        if not result.data:
            return False

        for n in self.notifications:
            if n.id == notification_id:
                n.is_read = True
        return True

    async def mark_all_as_read(self) -> int:
        """안 읽은 알림 전부 읽음 처리, 처리된 개수 반환 (실패 시 -1)"""
        try:
            result = self.supabase.table(NOTIFICATIONS_TABLE).update({
                "is_read": True,
                "updated_at": datetime.now(timezone.utc).isoformat()
            }).eq("user_id", self.user_id).eq("is_read", False).execute()
        except Exception as e:
            logger.error(f"알림 전체 읽음 처리 오류: user={self.user_id}: {e}")
            self.error = str(e)
            return -1

        for n in self.notifications:
            n.is_read = True
        return len(result.data or [])

    async def delete_notification(self, notification_id: str) -> bool:
        try:
            result = self.supabase.table(NOTIFICATIONS_TABLE).delete().eq(
                "id", notification_id
            ).eq("user_id", self.user_id).execute()
        except Exception as e:
            logger.error(f"알림 삭제 오류: notification={notification_id}: {e}")
            self.error = str(e)
            return False

        if not result.data:
            return False

        self.notifications = [n for n in self.notifications if n.id != notification_id]
        return True
