"""
Lost & Found Module - 분실물 게시판
"""
from .router import router as lost_found_router
from .models import LostFoundItem, LostFoundStatus
from .service import LostFoundService

__all__ = ["lost_found_router", "LostFoundItem", "LostFoundStatus", "LostFoundService"]
