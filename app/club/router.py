"""
Club Router

동아리 구독 / 멤버십 / 가입 신청 API
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from app.auth.dependencies import get_current_user
from app.auth.models import CurrentUser
from database.supabase_client import get_db
from .admin import ClubAdminService
from .memberships import MembershipService
from .models import (
    ApplicationCreate,
    Club,
    ClubMembership,
    ClubMembershipApplication,
    ClubStats,
    ClubSubscription,
    JoinClubRequest,
    NotificationPreferences,
    SubscriptionStatus,
)
from .subscriptions import SubscriptionService

router = APIRouter(tags=["Clubs"])


def get_subscription_service(
    user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_db)
) -> SubscriptionService:
    return SubscriptionService(user.id, supabase)


def get_membership_service(supabase: Client = Depends(get_db)) -> MembershipService:
    return MembershipService(supabase)


# =============================================
# 구독
# =============================================

@router.get("/clubs/subscriptions", response_model=List[ClubSubscription])
async def list_subscriptions(
    service: SubscriptionService = Depends(get_subscription_service)
):
    """내 활성 구독 목록"""
    return await service.fetch_subscriptions()


@router.get("/clubs/{club_id}/subscription", response_model=SubscriptionStatus)
async def get_subscription_status(
    club_id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """구독 여부"""
    await service.fetch_subscriptions()
    return SubscriptionStatus(club_id=club_id, subscribed=service.is_subscribed_to_club(club_id))


@router.post("/clubs/{club_id}/subscription", response_model=SubscriptionStatus)
async def subscribe(
    club_id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """동아리 구독 (이미 구독 중이어도 성공)"""
    if not await service.subscribe_to_club(club_id):
        raise HTTPException(status_code=400, detail="구독에 실패했습니다")
    return SubscriptionStatus(club_id=club_id, subscribed=service.is_subscribed_to_club(club_id))


@router.delete("/clubs/{club_id}/subscription", response_model=SubscriptionStatus)
async def unsubscribe(
    club_id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """동아리 구독 해지"""
    if not await service.unsubscribe_from_club(club_id):
        raise HTTPException(status_code=400, detail="구독 해지에 실패했습니다")
    return SubscriptionStatus(club_id=club_id, subscribed=service.is_subscribed_to_club(club_id))


@router.post("/clubs/{club_id}/subscription/toggle", response_model=SubscriptionStatus)
async def toggle_subscription(
    club_id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """구독 토글 (동아리 상세 화면 버튼)"""
    await service.fetch_subscriptions()
    subscribed = await service.toggle_subscription(club_id)
    if subscribed is None:
        raise HTTPException(status_code=400, detail="구독 변경에 실패했습니다")
    return SubscriptionStatus(club_id=club_id, subscribed=subscribed)


@router.patch("/clubs/{club_id}/subscription/preferences", response_model=List[ClubSubscription])
async def update_preferences(
    club_id: str,
    preferences: NotificationPreferences,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """구독 알림 설정 변경"""
    if not await service.update_notification_preferences(club_id, preferences):
        raise HTTPException(status_code=404, detail="구독 중인 동아리가 아닙니다")
    return service.subscriptions


@router.get("/clubs/{club_id}/stats", response_model=ClubStats)
async def get_club_stats(
    club_id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """구독자 수 / 멤버 수"""
    return ClubStats(
        club_id=club_id,
        subscriber_count=await service.get_club_subscription_count(club_id),
        member_count=await service.get_club_member_count(club_id)
    )


# =============================================
# 동아리 목록 / 가입
# =============================================

@router.get("/clubs/active", response_model=List[Club])
async def list_active_clubs(
    user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_db)
):
    """활동중인 동아리"""
    return await ClubAdminService(user.id, supabase).fetch_active_clubs()


@router.post("/clubs/{club_id}/join")
async def join_club(
    club_id: str,
    request: JoinClubRequest,
    user: CurrentUser = Depends(get_current_user),
    service: MembershipService = Depends(get_membership_service)
):
    """동아리 가입 (join_club RPC)"""
    membership_id = await service.join_club(club_id, user.id, request.notes)
    if not membership_id:
        raise HTTPException(status_code=400, detail="동아리 가입에 실패했습니다")
    return {"membership_id": membership_id}


# =============================================
# 멤버십
# =============================================

@router.get("/users/{user_id}/memberships", response_model=List[ClubMembership])
async def list_user_memberships(
    user_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: MembershipService = Depends(get_membership_service)
):
    """
    사용자 동아리 멤버십

    club_memberships가 비어 있으면 승인된 가입 신청서로 구성한다.
    """
    return await service.get_user_memberships(user_id)


# =============================================
# 가입 신청
# =============================================

@router.get("/me/applications", response_model=List[ClubMembershipApplication])
async def list_my_applications(
    user: CurrentUser = Depends(get_current_user),
    service: MembershipService = Depends(get_membership_service)
):
    """내 가입 신청 목록"""
    return await service.get_user_applications(user.id)


@router.post("/clubs/{club_id}/applications", status_code=201)
async def submit_application(
    club_id: str,
    form: ApplicationCreate,
    user: CurrentUser = Depends(get_current_user),
    service: MembershipService = Depends(get_membership_service)
):
    """동아리 가입 신청"""
    try:
        application = await service.submit_application(club_id, user.id, form)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not application:
        raise HTTPException(status_code=500, detail="가입 신청 저장에 실패했습니다")
    return application


@router.post("/me/applications/{application_id}/withdraw")
async def withdraw_application(
    application_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: MembershipService = Depends(get_membership_service)
):
    """검토중인 가입 신청 철회"""
    if not await service.withdraw_application(application_id, user.id):
        raise HTTPException(status_code=404, detail="철회할 수 있는 신청서가 없습니다")
    return {"message": "가입 신청이 철회되었습니다", "application_id": application_id}
