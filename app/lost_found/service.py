"""
Lost & Found Service

분실물 게시판
- 목록은 전체 공개, 최신순
- 수정/상태 변경/삭제는 작성자 본인 또는 포털 관리자
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from loguru import logger
from supabase import Client

from app.auth.models import CurrentUser
from database.supabase_client import get_supabase_client
from .models import LostFoundCreate, LostFoundItem, LostFoundStatus, LostFoundUpdate

LOST_FOUND_TABLE = "lost_found_items"


class LostFoundService:
    """분실물 서비스"""

    def __init__(self, user: Optional[CurrentUser], supabase: Optional[Client] = None):
        self.user = user
        self.supabase = supabase or get_supabase_client()
        self.items: List[LostFoundItem] = []
        self.error: Optional[str] = None

    async def fetch_items(self) -> List[LostFoundItem]:
        """전체 분실물 (최신순)"""
        try:
            result = self.supabase.table(LOST_FOUND_TABLE).select("*").order(
                "created_at", desc=True
            ).execute()
            self.items = [LostFoundItem(**row) for row in (result.data or [])]
            self.error = None
        except Exception as e:
            logger.error(f"분실물 조회 오류: {e}")
            self.error = str(e) or "Failed to fetch items"
        return self.items

    def get_items_by_status(self, status: LostFoundStatus) -> List[LostFoundItem]:
        return [item for item in self.items if item.status == status]

    def get_user_items(self) -> List[LostFoundItem]:
        """마지막 조회 결과 중 내 게시글"""
        if not self.user:
            return []
        return [item for item in self.items if item.user_id == self.user.id]

    async def create_item(self, item: LostFoundCreate) -> Optional[Dict[str, Any]]:
        """분실/습득 신고 (작성자 이름/이메일 함께 저장)"""
        if not self.user:
            self.error = "User not authenticated"
            return None

        data = {
            "title": item.title,
            "description": item.description,
            "location": item.location,
            "status": item.status.value,
            "image_url": item.image_url or None,
            "user_id": self.user.id,
            "user_name": self.user.full_name,
            "user_email": self.user.email,
        }

        try:
            result = self.supabase.table(LOST_FOUND_TABLE).insert(data).execute()
        except Exception as e:
            logger.error(f"분실물 등록 오류: user={self.user.id}: {e}")
            self.error = str(e) or "Failed to create item"
            return None

        if not result.data:
            return None

        logger.info(f"분실물 등록: item={result.data[0]['id']} user={self.user.id}")
        await self.fetch_items()
        return result.data[0]

    async def update_item(self, item_id: str, updates: LostFoundUpdate) -> Optional[Dict[str, Any]]:
        """분실물 정보 수정"""
        fields = updates.model_dump(exclude_unset=True)
        if not fields:
            self.error = "변경할 항목이 없습니다"
            return None
        return self._update(item_id, fields, "분실물 수정")

    async def update_item_status(self, item_id: str, status: LostFoundStatus) -> Optional[Dict[str, Any]]:
        """상태 변경 (lost / found / claimed)"""
        return self._update(item_id, {"status": status.value}, "분실물 상태 변경")

    def _update(self, item_id: str, fields: Dict[str, Any], label: str) -> Optional[Dict[str, Any]]:
        if not self.user:
            self.error = "User not authenticated"
            return None

        data = dict(fields, updated_at=datetime.now(timezone.utc).isoformat())
        try:
            query = self.supabase.table(LOST_FOUND_TABLE).update(data).eq("id", item_id)
            if not self.user.is_admin():
                query = query.eq("user_id", self.user.id)
            result = query.execute()
        except Exception as e:
            logger.error(f"{label} 오류: item={item_id}: {e}")
            self.error = str(e)
            return None

        if not result.data:
            logger.warning(f"{label} 대상 없음: item={item_id} user={self.user.id}")
            self.error = "Item not found"
            return None

        updated = result.data[0]
        self.items = [
            LostFoundItem(**updated) if item.id == item_id else item
            for item in self.items
        ]
        logger.info(f"{label}: item={item_id}")
        return updated

    async def delete_item(self, item_id: str) -> bool:
        """분실물 삭제"""
        if not self.user:
            return False

        try:
            query = self.supabase.table(LOST_FOUND_TABLE).delete().eq("id", item_id)
            if not self.user.is_admin():
                query = query.eq("user_id", self.user.id)
            result = query.execute()
        except Exception as e:
            logger.error(f"분실물 삭제 오류: item={item_id}: {e}")
            self.error = str(e)
            return False

        if not result.data:
            return False

        self.items = [item for item in self.items if item.id != item_id]
        logger.info(f"분실물 삭제: item={item_id}")
        return True
