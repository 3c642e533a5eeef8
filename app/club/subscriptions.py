"""
Club Subscription Service

사용자의 동아리 구독(알림 opt-in) 관리
- 구독 목록은 한 번 조회해서 들고 있다가 변경 후 다시 조회 (서버가 진실)
- (club_id, user_id) 유니크 제약은 DB에 맡기고 upsert로 중복 구독을 흡수
- 실패는 로그만 남기고 bool/빈 값으로 변환 (재시도 없음)
"""

from typing import Optional, List, Dict, Any
from loguru import logger
from supabase import Client

from database.supabase_client import get_supabase_client
from .models import ClubSubscription, NotificationPreferences

SUBSCRIPTIONS_TABLE = "club_subscriptions"
MEMBERSHIPS_TABLE = "club_memberships"


class SubscriptionService:
    """동아리 구독 서비스 (요청 단위로 생성)"""

    def __init__(self, user_id: Optional[str], supabase: Optional[Client] = None):
        self.user_id = user_id
        self.supabase = supabase or get_supabase_client()

        # 마지막으로 조회한 서버 상태
        self.subscriptions: List[ClubSubscription] = []
        self.loading = False
        self.error: Optional[str] = None

    # =============================================
    # 조회
    # =============================================

    async def fetch_subscriptions(self) -> List[ClubSubscription]:
        """현재 사용자의 활성 구독 전체 조회 후 로컬 상태 교체"""
        if not self.user_id:
            logger.debug("구독 조회 생략: 사용자 없음")
            return self.subscriptions

        logger.debug(f"구독 조회: user={self.user_id}")
        self.loading = True
        try:
            result = self.supabase.table(SUBSCRIPTIONS_TABLE).select("*").eq(
                "user_id", self.user_id
            ).eq("is_active", True).execute()

            self.subscriptions = [
                ClubSubscription(**row) for row in (result.data or [])
            ]
            self.error = None
        except Exception as e:
            logger.error(f"구독 조회 오류: {e}")
            self.error = str(e)
        finally:
            self.loading = False

        return self.subscriptions

    def is_subscribed_to_club(self, club_id: str) -> bool:
        """마지막 조회 결과 기준 구독 여부 (실시간 아님)"""
        return any(sub.club_id == club_id for sub in self.subscriptions)

    async def get_club_subscription_count(self, club_id: str) -> int:
        """동아리 활성 구독자 수 (캐시 없음, 표시용)"""
        try:
            result = self.supabase.table(SUBSCRIPTIONS_TABLE).select(
                "*", count="exact", head=True
            ).eq("club_id", club_id).eq("is_active", True).execute()
            return result.count or 0
        except Exception as e:
            logger.error(f"구독자 수 조회 오류: {e}")
            return 0

    async def get_club_member_count(self, club_id: str) -> int:
        """동아리 활성 멤버 수"""
        try:
            result = self.supabase.table(MEMBERSHIPS_TABLE).select(
                "*", count="exact", head=True
            ).eq("club_id", club_id).eq("status", "active").execute()
            return result.count or 0
        except Exception as e:
            logger.error(f"멤버 수 조회 오류: {e}")
            return 0

    # =============================================
    # 구독 / 해지
    # =============================================

    async def subscribe_to_club(self, club_id: str) -> bool:
        """
        동아리 구독

        기본 알림 설정(전부 on)으로 저장한다.
        이미 구독 중이면 기존 행(알림 설정 포함)을 그대로 두므로 활성 구독은 항상 1건.
        """
        if not self.user_id:
            logger.debug("구독 불가: 사용자 없음")
            return False

        data: Dict[str, Any] = {
            "club_id": club_id,
            "user_id": self.user_id,
            "notification_preferences": NotificationPreferences().model_dump(),
            "is_active": True,
        }

        try:
            self.supabase.table(SUBSCRIPTIONS_TABLE).upsert(
                data,
                on_conflict="club_id,user_id",
                ignore_duplicates=True
            ).execute()
        except Exception as e:
            logger.error(f"동아리 구독 오류: club={club_id} user={self.user_id}: {e}")
            self.error = str(e)
            return False

        logger.info(f"동아리 구독: club={club_id} user={self.user_id}")
        await self.fetch_subscriptions()
        return True

    async def unsubscribe_from_club(self, club_id: str) -> bool:
        """동아리 구독 해지 (행 삭제)"""
        if not self.user_id:
            logger.debug("구독 해지 불가: 사용자 없음")
            return False

        try:
            self.supabase.table(SUBSCRIPTIONS_TABLE).delete().eq(
                "club_id", club_id
            ).eq("user_id", self.user_id).execute()
        except Exception as e:
            logger.error(f"동아리 구독 해지 오류: club={club_id} user={self.user_id}: {e}")
            self.error = str(e)
            return False

        logger.info(f"동아리 구독 해지: club={club_id} user={self.user_id}")
        await self.fetch_subscriptions()
        return True

    async def toggle_subscription(self, club_id: str) -> Optional[bool]:
        """
        구독 토글

        Returns:
            토글 후 구독 여부, 실패 시 None
        """
        if self.is_subscribed_to_club(club_id):
            ok = await self.unsubscribe_from_club(club_id)
        else:
            ok = await self.subscribe_to_club(club_id)

        if not ok:
            return None
        return self.is_subscribed_to_club(club_id)

    async def update_notification_preferences(
        self,
        club_id: str,
        preferences: NotificationPreferences
    ) -> bool:
        """구독 알림 설정 변경 (구독 중인 경우만)"""
        if not self.user_id:
            return False

        try:
            result = self.supabase.table(SUBSCRIPTIONS_TABLE).update({
                "notification_preferences": preferences.model_dump()
            }).eq("club_id", club_id).eq("user_id", self.user_id).execute()
        except Exception as e:
            logger.error(f"알림 설정 변경 오류: club={club_id}: {e}")
            self.error = str(e)
            return False

        if not result.data:
            logger.warning(f"알림 설정 변경 대상 없음: club={club_id} user={self.user_id}")
            return False

        await self.fetch_subscriptions()
        return True
