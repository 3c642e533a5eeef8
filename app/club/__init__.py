"""
Club Module

동아리 구독 / 멤버십 / 가입 신청
- 구독: 알림 opt-in, 멤버십과 별개
- 멤버십: club_memberships 또는 승인된 가입 신청서에서 구성
"""

from .router import router as club_router
from .models import (
    ApplicationStatus,
    ClubStatus,
    ClubSubscription,
    ClubMembership,
    ClubMembershipApplication,
    NotificationPreferences,
)
from .subscriptions import SubscriptionService
from .memberships import MembershipService
from .admin import ClubAdminService

__all__ = [
    "club_router",
    "ApplicationStatus",
    "ClubStatus",
    "ClubSubscription",
    "ClubMembership",
    "ClubMembershipApplication",
    "NotificationPreferences",
    "SubscriptionService",
    "MembershipService",
    "ClubAdminService",
]
