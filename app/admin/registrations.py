"""
Registration Service

학생 가입 승인 (관리자)
- get_pending_registrations / approve_user_registration / reject_user_registration RPC
- 학생증 파일은 비공개 버킷이라 서명 URL로만 열람
"""

from typing import Optional, List, Dict, Any
from loguru import logger
from supabase import Client

from app.config import get_settings
from app.uploads import create_signed_url
from database.supabase_client import get_supabase_client
from .models import PendingRegistration


class RegistrationService:
    """가입 승인 서비스"""

    def __init__(self, supabase: Optional[Client] = None):
        self.supabase = supabase or get_supabase_client()
        self.settings = get_settings()
        self.registrations: List[PendingRegistration] = []
        self.error: Optional[str] = None

    async def fetch_pending_registrations(self) -> List[PendingRegistration]:
        """승인 대기 목록"""
        try:
            result = self.supabase.rpc("get_pending_registrations").execute()
            self.registrations = [PendingRegistration(**row) for row in (result.data or [])]
            self.error = None
        except Exception as e:
            logger.error(f"승인 대기 목록 조회 오류: {e}")
            self.error = str(e) or "Failed to fetch pending registrations"
        return self.registrations

    async def approve_registration(self, user_id: str, admin_notes: Optional[str] = None) -> bool:
        """가입 승인"""
        return await self._decide("approve_user_registration", user_id, admin_notes, "가입 승인")

    async def reject_registration(self, user_id: str, admin_notes: Optional[str] = None) -> bool:
        """가입 거절"""
        return await self._decide("reject_user_registration", user_id, admin_notes, "가입 거절")

    async def _decide(
        self,
        rpc_name: str,
        user_id: str,
        admin_notes: Optional[str],
        label: str
    ) -> bool:
        try:
            result = self.supabase.rpc(rpc_name, {
                "_user_id": user_id,
                "_admin_notes": admin_notes or None
            }).execute()
        except Exception as e:
            logger.error(f"{label} 오류: user={user_id}: {e}")
            self.error = str(e)
            return False

        # RPC 결과: {"success": bool, "error": str}
        payload: Dict[str, Any] = result.data or {}
        if not payload.get("success"):
            self.error = payload.get("error") or f"{label} 실패"
            logger.error(f"{label} 실패: user={user_id}: {self.error}")
            return False

        logger.info(f"{label}: user={user_id}")
        await self.fetch_pending_registrations()
        return True

    def get_student_id_url(self, file_path: str) -> Optional[str]:
        """학생증 서명 URL (기본 1시간)"""
        return create_signed_url(
            self.supabase,
            self.settings.student_id_bucket,
            file_path,
            self.settings.signed_url_expires_in
        )
