"""
Notification Models
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class Notification(BaseModel):
    """사용자 알림"""
    id: str
    user_id: str
    message: str
    type: str
    related_id: Optional[str] = None
    is_read: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NotificationList(BaseModel):
    notifications: List[Notification]
    unread_count: int
