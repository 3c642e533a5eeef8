"""
Club Membership Service

동아리 멤버십 조회와 가입 신청
- club_memberships 행이 없으면 승인된 가입 신청서로 멤버십을 합성 (DB에 기록하지 않음)
- 신청서 조회 시 동아리 이름을 별도 조회로 붙임
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any, Iterable
from loguru import logger
from supabase import Client

from database.supabase_client import get_supabase_client
from .models import (
    ApplicationCreate,
    ApplicationStatus,
    ClubMembership,
    ClubMembershipApplication,
    ClubSummary,
    MembershipStatus,
)

MEMBERSHIPS_TABLE = "club_memberships"
APPLICATIONS_TABLE = "club_membership_application"
CLUBS_TABLE = "clubs"

SYNTHESIZED_ROLE = "Member"
SYNTHESIZED_DETAILED_ROLE = "Active Member"


class MembershipService:
    """동아리 멤버십/가입 신청 서비스"""

    def __init__(self, supabase: Optional[Client] = None):
        self.supabase = supabase or get_supabase_client()
        self.error: Optional[str] = None

    # =============================================
    # 멤버십 조회 (2단계 fallback)
    # =============================================

    async def get_user_memberships(self, user_id: str) -> List[ClubMembership]:
        """
        사용자의 동아리 멤버십

        1. club_memberships에서 활성 멤버십 조회
        2. 없으면 승인된 가입 신청서를 멤버십 형태로 변환
        3. 결과의 club_id 집합으로 동아리 정보를 한 번에 조회 (실패해도 멤버십은 반환)
        """
        if not user_id:
            return []

        try:
            rows = self._fetch_membership_rows(user_id)

            if not rows:
                logger.debug(f"멤버십 없음, 승인된 신청서 확인: user={user_id}")
                rows = self._synthesize_from_applications(user_id)

            if not rows:
                return []

            try:
                clubs = self._fetch_club_summaries(row["club_id"] for row in rows)
            except Exception as e:
                # 동아리 정보 없이 멤버십만 반환
                logger.warning(f"동아리 정보 조회 오류: user={user_id}: {e}")
                clubs = {}

            memberships = []
            for row in rows:
                memberships.append(ClubMembership(
                    **row,
                    club=clubs.get(row["club_id"]) or ClubSummary.unknown(row["club_id"])
                ))
            self.error = None
            return memberships

        except Exception as e:
            logger.error(f"멤버십 조회 오류: user={user_id}: {e}")
            self.error = str(e)
            return []

    def _fetch_membership_rows(self, user_id: str) -> List[Dict[str, Any]]:
        result = self.supabase.table(MEMBERSHIPS_TABLE).select(
            "id, club_id, user_id, role, detailed_role, joined_at, status"
        ).eq("user_id", user_id).eq(
            "status", MembershipStatus.active.value
        ).order("joined_at", desc=True).execute()
        return result.data or []

    def _synthesize_from_applications(self, user_id: str) -> List[Dict[str, Any]]:
        """승인된 신청서 → 멤버십 형태 (읽을 때마다 다시 계산)"""
        result = self.supabase.table(APPLICATIONS_TABLE).select(
            "id, club_id, applicant_id, status, application_date"
        ).eq("applicant_id", user_id).eq(
            "status", ApplicationStatus.approved.value
        ).order("application_date", desc=True).execute()

        return [
            {
                "id": app["id"],
                "club_id": app["club_id"],
                "user_id": app["applicant_id"],
                "role": SYNTHESIZED_ROLE,
                "detailed_role": SYNTHESIZED_DETAILED_ROLE,
                "joined_at": app.get("application_date"),
                "status": MembershipStatus.active.value,
            }
            for app in (result.data or [])
        ]

    def _fetch_club_summaries(self, club_ids: Iterable[str]) -> Dict[str, ClubSummary]:
        ids = list(dict.fromkeys(club_ids))
        if not ids:
            return {}

        result = self.supabase.table(CLUBS_TABLE).select(
            "id, name, description, club_image_url, club_logo_url, category"
        ).in_("id", ids).execute()

        return {club["id"]: ClubSummary(**club) for club in (result.data or [])}

    # =============================================
    # 가입 신청
    # =============================================

    async def get_user_applications(self, user_id: str) -> List[ClubMembershipApplication]:
        """사용자의 가입 신청 목록 (최신순, 동아리 이름 포함)"""
        if not user_id:
            return []

        try:
            result = self.supabase.table(APPLICATIONS_TABLE).select(
                "id, club_id, applicant_id, motivation, experience, skills, availability, "
                "expectations, status, application_date, agreed_to_terms, created_at"
            ).eq("applicant_id", user_id).order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"가입 신청 조회 오류: user={user_id}: {e}")
            self.error = str(e)
            return []

        applications = result.data or []
        if not applications:
            return []

        club_ids = list(dict.fromkeys(app["club_id"] for app in applications))
        club_names: Dict[str, str] = {}
        try:
            clubs_result = self.supabase.table(CLUBS_TABLE).select(
                "id, name"
            ).in_("id", club_ids).execute()
            club_names = {club["id"]: club["name"] for club in (clubs_result.data or [])}
        except Exception as e:
            # 이름 없이 계속 진행
            logger.warning(f"동아리 이름 조회 오류: {e}")

        return [
            ClubMembershipApplication(
                **app,
                club_name=club_names.get(app["club_id"]) or f"Club {app['club_id'][:8]}..."
            )
            for app in applications
        ]

    async def submit_application(
        self,
        club_id: str,
        applicant_id: str,
        form: ApplicationCreate
    ) -> Optional[Dict[str, Any]]:
        """
        가입 신청서 제출

        Raises:
            ValueError: 필수 항목 누락, 약관 미동의, 이미 신청한 동아리
        """
        if not form.motivation.strip() or not form.availability.strip():
            raise ValueError("지원 동기와 활동 가능 시간은 필수입니다")

        if not form.agreed_to_terms:
            raise ValueError("약관에 동의해야 합니다")

        existing = self.supabase.table(APPLICATIONS_TABLE).select(
            "id, status"
        ).eq("club_id", club_id).eq("applicant_id", applicant_id).limit(1).execute()

        if existing.data:
            raise ValueError(f"이미 신청한 동아리입니다 (상태: {existing.data[0]['status']})")

        data = {
            "club_id": club_id,
            "applicant_id": applicant_id,
            "motivation": form.motivation,
            "experience": form.experience,
            "skills": form.skills,
            "availability": form.availability,
            "expectations": form.expectations,
            "status": ApplicationStatus.pending.value,
            "application_date": datetime.now(timezone.utc).isoformat(),
            "agreed_to_terms": form.agreed_to_terms,
        }

        try:
            result = self.supabase.table(APPLICATIONS_TABLE).insert(data).execute()
        except Exception as e:
            logger.error(f"가입 신청 저장 오류: club={club_id} user={applicant_id}: {e}")
            self.error = str(e)
            return None

        if not result.data:
            return None

        logger.info(f"가입 신청 접수: club={club_id} user={applicant_id}")
        return result.data[0]

    async def withdraw_application(self, application_id: str, applicant_id: str) -> bool:
        """검토중인 본인 신청서 철회"""
        try:
            result = self.supabase.table(APPLICATIONS_TABLE).update({
                "status": ApplicationStatus.withdrawn.value
            }).eq("id", application_id).eq(
                "applicant_id", applicant_id
            ).eq("status", ApplicationStatus.pending.value).execute()
        except Exception as e:
            logger.error(f"가입 신청 철회 오류: application={application_id}: {e}")
            self.error = str(e)
            return False

        if not result.data:
            logger.warning(f"철회할 신청서 없음: application={application_id} user={applicant_id}")
            return False

        logger.info(f"가입 신청 철회: application={application_id}")
        return True

    # =============================================
    # 직접 가입 (RPC)
    # =============================================

    async def join_club(
        self,
        club_id: str,
        user_id: str,
        notes: Optional[str] = None
    ) -> Optional[str]:
        """join_club RPC 호출, 생성된 멤버십 ID 반환"""
        try:
            result = self.supabase.rpc("join_club", {
                "_club_id": club_id,
                "_user_id": user_id,
                "_notes": notes or None
            }).execute()
        except Exception as e:
            logger.error(f"동아리 가입 오류: club={club_id} user={user_id}: {e}")
            self.error = str(e)
            return None

        logger.info(f"동아리 가입: club={club_id} user={user_id}")
        return result.data
