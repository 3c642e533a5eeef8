"""
Club Models

동아리 구독/멤버십/가입신청 Pydantic 모델 정의
"""

from datetime import date, datetime
from typing import Optional, List, Any, Dict
from enum import Enum
from pydantic import BaseModel, Field, field_validator


# =============================================
# Enums
# =============================================

class ClubStatus(str, Enum):
    """동아리 상태"""
    pending = "pending"       # 승인 대기
    active = "active"         # 활동중
    inactive = "inactive"     # 휴면
    suspended = "suspended"   # 활동 정지


class ApplicationStatus(str, Enum):
    """가입 신청 상태"""
    pending = "pending"       # 검토중
    approved = "approved"     # 승인
    rejected = "rejected"     # 거절
    withdrawn = "withdrawn"   # 신청자 철회


class MembershipStatus(str, Enum):
    """멤버십 상태"""
    active = "active"
    inactive = "inactive"
    pending = "pending"


# =============================================
# Subscription
# =============================================

class NotificationPreferences(BaseModel):
    """구독 알림 설정"""
    events: bool = True
    announcements: bool = True
    activities: bool = True


class ClubSubscription(BaseModel):
    """동아리 구독 (알림 수신 opt-in, 멤버십과 별개)"""
    id: str
    club_id: str
    user_id: str
    subscribed_at: Optional[datetime] = None
    notification_preferences: NotificationPreferences = Field(default_factory=NotificationPreferences)
    is_active: bool = True

    @field_validator("notification_preferences", mode="before")
    @classmethod
    def default_preferences(cls, v):
        # 컬럼이 null인 예전 행
        return v if v is not None else NotificationPreferences()


class ClubStats(BaseModel):
    """동아리 카운터 (표시용, 캐시하지 않음)"""
    club_id: str
    subscriber_count: int = 0
    member_count: int = 0


class SubscriptionStatus(BaseModel):
    """구독 여부"""
    club_id: str
    subscribed: bool


# =============================================
# Membership
# =============================================

class ClubSummary(BaseModel):
    """멤버십 화면에 붙는 동아리 요약"""
    id: str
    name: str
    description: Optional[str] = ""
    club_image_url: Optional[str] = None
    club_logo_url: Optional[str] = None
    category: Optional[str] = ""

    @classmethod
    def unknown(cls, club_id: str) -> "ClubSummary":
        """clubs 테이블에서 찾지 못한 동아리"""
        return cls(id=club_id, name="Unknown Club")


class ClubMembership(BaseModel):
    """동아리 멤버십 (직접 등록 또는 승인된 신청서에서 합성)"""
    id: str
    club_id: str
    user_id: str
    role: str
    detailed_role: Optional[str] = None
    joined_at: Optional[datetime] = None
    status: str = MembershipStatus.active.value
    club: Optional[ClubSummary] = None


class ClubMembershipApplication(BaseModel):
    """동아리 가입 신청서"""
    id: str
    club_id: str
    club_name: Optional[str] = None
    applicant_id: Optional[str] = None
    motivation: Optional[str] = None  # 예전 행은 null일 수 있음
    experience: Optional[str] = None
    skills: Optional[str] = None
    availability: Optional[str] = None
    expectations: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.pending
    application_date: Optional[datetime] = None
    agreed_to_terms: bool = False
    created_at: Optional[datetime] = None

    @field_validator("status", "agreed_to_terms", mode="before")
    @classmethod
    def null_to_default(cls, v, info):
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class ApplicationCreate(BaseModel):
    """가입 신청 폼"""
    motivation: str
    experience: Optional[str] = None
    skills: Optional[str] = None
    availability: str
    expectations: Optional[str] = None
    agreed_to_terms: bool = False

    @field_validator("experience", "skills", "expectations")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class JoinClubRequest(BaseModel):
    """join_club RPC 요청"""
    notes: Optional[str] = None


# =============================================
# Club (관리자)
# =============================================

class ClubCreate(BaseModel):
    """동아리 생성/수정 필드"""
    name: str = Field(..., min_length=1, max_length=200)
    description: str
    category: str
    location: Optional[str] = None
    address: Optional[str] = None
    meeting_day: Optional[str] = None
    meeting_time: Optional[str] = None
    max_members: Optional[int] = Field(None, ge=1)
    requirements: Optional[str] = None
    contact_email: Optional[str] = None
    club_mail: Optional[str] = None
    contact_phone: Optional[str] = None
    club_details: Optional[str] = None
    panel_members: Optional[List[Any]] = None
    previous_events: Optional[List[Any]] = None
    achievements: Optional[List[Any]] = None
    departments: Optional[List[Any]] = None
    website: Optional[str] = None
    social_media: Optional[Dict[str, Any]] = None
    founded_date: Optional[date] = None
    mission_statement: Optional[str] = None
    vision_statement: Optional[str] = None
    is_public: bool = True


class ClubUpdate(ClubCreate):
    """동아리 수정 (상태 변경 포함 가능)"""
    status: Optional[ClubStatus] = None


class ClubStatusUpdate(BaseModel):
    """동아리 상태 변경"""
    status: ClubStatus


class Club(ClubCreate):
    """동아리 전체 레코드"""
    id: str
    status: ClubStatus = ClubStatus.pending
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    members_count: Optional[int] = None

    # RPC 결과에 빈 name이 올 수 있음
    name: str = ""
    description: Optional[str] = ""
    category: Optional[str] = ""
