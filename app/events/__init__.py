"""
Events Module - 캠퍼스 행사
"""
from .router import router as events_router
from .models import Event, EventCreate, EventStatus
from .service import EventService

__all__ = ["events_router", "Event", "EventCreate", "EventStatus", "EventService"]
