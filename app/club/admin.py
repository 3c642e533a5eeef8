"""
Club Admin Service

동아리 관리 RPC 래퍼 (포털 관리자용)
모든 변경 후 동아리 목록을 다시 조회한다.
"""

from typing import Optional, List, Dict, Any
from loguru import logger
from supabase import Client

from database.supabase_client import get_supabase_client
from .models import Club, ClubCreate, ClubStatus


def _club_rpc_params(club_data: ClubCreate) -> Dict[str, Any]:
    """ClubCreate → RPC 파라미터 (_ 접두사, 빈 값은 null)"""
    params: Dict[str, Any] = {
        "_name": club_data.name,
        "_description": club_data.description,
        "_category": club_data.category,
    }
    optional_fields = [
        "location", "address", "meeting_day", "meeting_time", "max_members",
        "requirements", "contact_email", "club_mail", "contact_phone",
        "club_details", "panel_members", "previous_events", "achievements",
        "departments", "website", "social_media", "mission_statement",
        "vision_statement",
    ]
    for field in optional_fields:
        params[f"_{field}"] = getattr(club_data, field) or None

    params["_founded_date"] = club_data.founded_date.isoformat() if club_data.founded_date else None
    params["_is_public"] = club_data.is_public
    return params


class ClubAdminService:
    """동아리 관리 서비스"""

    def __init__(self, user_id: str, supabase: Optional[Client] = None):
        self.user_id = user_id
        self.supabase = supabase or get_supabase_client()
        self.clubs: List[Club] = []
        self.error: Optional[str] = None

    async def fetch_clubs(self) -> List[Club]:
        """전체 동아리 (관리자)"""
        try:
            result = self.supabase.rpc("get_all_clubs_admin").execute()
            self.clubs = [Club(**row) for row in (result.data or [])]
            self.error = None
        except Exception as e:
            logger.error(f"동아리 목록 조회 오류: {e}")
            self.error = "Failed to fetch clubs"
        return self.clubs

    async def fetch_active_clubs(self) -> List[Club]:
        """활동중인 동아리 (일반 사용자)"""
        try:
            result = self.supabase.rpc("get_active_clubs").execute()
            return [Club(**row) for row in (result.data or [])]
        except Exception as e:
            logger.error(f"활동 동아리 조회 오류: {e}")
            self.error = "Failed to fetch clubs"
            return []

    async def create_club(self, club_data: ClubCreate) -> Optional[str]:
        """동아리 생성, 새 club_id 반환"""
        params = _club_rpc_params(club_data)
        params["_created_by"] = self.user_id

        try:
            result = self.supabase.rpc("create_club_admin", params).execute()
        except Exception as e:
            logger.error(f"동아리 생성 오류: {e}")
            self.error = "Failed to create club"
            return None

        logger.info(f"동아리 생성: {club_data.name} by {self.user_id}")
        await self.fetch_clubs()
        return result.data

    async def update_club(
        self,
        club_id: str,
        club_data: ClubCreate,
        status: Optional[ClubStatus] = None
    ) -> bool:
        """동아리 정보 수정"""
        params = _club_rpc_params(club_data)
        params["_club_id"] = club_id
        params["_user_id"] = self.user_id
        params["_status"] = status.value if status else None

        return await self._call_mutation("update_club_admin", params, "동아리 수정")

    async def approve_club(self, club_id: str) -> bool:
        """동아리 승인"""
        return await self._call_mutation("approve_club_admin", {
            "_club_id": club_id,
            "_admin_id": self.user_id
        }, "동아리 승인")

    async def update_club_status(self, club_id: str, status: ClubStatus) -> bool:
        """동아리 상태 변경"""
        return await self._call_mutation("update_club_status_admin", {
            "_club_id": club_id,
            "_status": status.value,
            "_admin_id": self.user_id
        }, "동아리 상태 변경")

    async def delete_club(self, club_id: str) -> bool:
        """동아리 삭제"""
        return await self._call_mutation("delete_club_admin", {
            "_club_id": club_id,
            "_user_id": self.user_id
        }, "동아리 삭제")

    async def _call_mutation(self, rpc_name: str, params: Dict[str, Any], label: str) -> bool:
        try:
            result = self.supabase.rpc(rpc_name, params).execute()
        except Exception as e:
            logger.error(f"{label} 오류: {e}")
            self.error = f"{label} 실패"
            return False

        # RPC는 boolean을 돌려준다
        if result.data is False:
            logger.warning(f"{label} 거부됨: club={params.get('_club_id')}")
            self.error = f"{label} 실패"
            return False

        logger.info(f"{label}: club={params.get('_club_id')}")
        await self.fetch_clubs()
        return True
