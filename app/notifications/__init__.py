"""
Notifications Module - 사용자 알림
"""
from .router import router as notifications_router
from .models import Notification
from .service import NotificationService

__all__ = ["notifications_router", "Notification", "NotificationService"]
