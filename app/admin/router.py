"""
Admin Router

포털 관리자 API
- 동아리 생성/수정/승인/상태 변경/삭제
- 학생 가입 승인
- 행사 생성/수정/공개/취소/삭제
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import Client

from app.auth.dependencies import require_admin
from app.auth.models import CurrentUser
from app.club.admin import ClubAdminService
from app.club.models import Club, ClubCreate, ClubStatusUpdate, ClubUpdate
from app.events.models import Event, EventCreate
from app.events.service import EventService
from database.supabase_client import get_db
from .models import PendingRegistration, RegistrationDecision, SignedUrlResponse
from .registrations import RegistrationService

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_club_admin_service(
    admin: CurrentUser = Depends(require_admin),
    supabase: Client = Depends(get_db)
) -> ClubAdminService:
    return ClubAdminService(admin.id, supabase)


def get_registration_service(
    admin: CurrentUser = Depends(require_admin),
    supabase: Client = Depends(get_db)
) -> RegistrationService:
    return RegistrationService(supabase)


def get_event_admin_service(
    admin: CurrentUser = Depends(require_admin),
    supabase: Client = Depends(get_db)
) -> EventService:
    return EventService(admin.id, supabase)


# =============================================
# 동아리 관리
# =============================================

@router.get("/clubs", response_model=List[Club])
async def list_clubs(service: ClubAdminService = Depends(get_club_admin_service)):
    """전체 동아리"""
    clubs = await service.fetch_clubs()
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return clubs


@router.post("/clubs", status_code=201)
async def create_club(
    club_data: ClubCreate,
    service: ClubAdminService = Depends(get_club_admin_service)
):
    """동아리 생성"""
    club_id = await service.create_club(club_data)
    if not club_id:
        raise HTTPException(status_code=400, detail=service.error or "동아리 생성에 실패했습니다")
    return {"club_id": club_id}


@router.put("/clubs/{club_id}")
async def update_club(
    club_id: str,
    club_data: ClubUpdate,
    service: ClubAdminService = Depends(get_club_admin_service)
):
    """동아리 수정"""
    if not await service.update_club(club_id, club_data, club_data.status):
        raise HTTPException(status_code=400, detail=service.error or "동아리 수정에 실패했습니다")
    return {"message": "수정되었습니다", "club_id": club_id}


@router.post("/clubs/{club_id}/approve")
async def approve_club(
    club_id: str,
    service: ClubAdminService = Depends(get_club_admin_service)
):
    """동아리 승인"""
    if not await service.approve_club(club_id):
        raise HTTPException(status_code=400, detail=service.error or "동아리 승인에 실패했습니다")
    return {"message": "승인되었습니다", "club_id": club_id}


@router.patch("/clubs/{club_id}/status")
async def update_club_status(
    club_id: str,
    body: ClubStatusUpdate,
    service: ClubAdminService = Depends(get_club_admin_service)
):
    """동아리 상태 변경"""
    if not await service.update_club_status(club_id, body.status):
        raise HTTPException(status_code=400, detail=service.error or "상태 변경에 실패했습니다")
    return {"message": "상태가 변경되었습니다", "club_id": club_id, "status": body.status.value}


@router.delete("/clubs/{club_id}")
async def delete_club(
    club_id: str,
    service: ClubAdminService = Depends(get_club_admin_service)
):
    """동아리 삭제"""
    if not await service.delete_club(club_id):
        raise HTTPException(status_code=400, detail=service.error or "동아리 삭제에 실패했습니다")
    return {"message": "삭제되었습니다", "club_id": club_id}


# =============================================
# 가입 승인
# =============================================

@router.get("/registrations", response_model=List[PendingRegistration])
async def list_pending_registrations(
    service: RegistrationService = Depends(get_registration_service)
):
    """승인 대기 학생 목록"""
    registrations = await service.fetch_pending_registrations()
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return registrations


@router.get("/registrations/document-url", response_model=SignedUrlResponse)
async def get_document_url(
    file_path: str = Query(..., min_length=1, description="student-ids 버킷 내 경로"),
    service: RegistrationService = Depends(get_registration_service)
):
    """학생증 열람용 서명 URL"""
    signed_url = service.get_student_id_url(file_path)
    if not signed_url:
        raise HTTPException(status_code=404, detail="파일을 찾을 수 없습니다")
    return SignedUrlResponse(
        file_path=file_path,
        signed_url=signed_url,
        expires_in=service.settings.signed_url_expires_in
    )


@router.post("/registrations/{user_id}/approve")
async def approve_registration(
    user_id: str,
    decision: RegistrationDecision,
    service: RegistrationService = Depends(get_registration_service)
):
    """가입 승인"""
    if not await service.approve_registration(user_id, decision.admin_notes):
        raise HTTPException(status_code=400, detail=service.error or "가입 승인에 실패했습니다")
    return {"message": "승인되었습니다", "user_id": user_id}


@router.post("/registrations/{user_id}/reject")
async def reject_registration(
    user_id: str,
    decision: RegistrationDecision,
    service: RegistrationService = Depends(get_registration_service)
):
    """가입 거절"""
    if not await service.reject_registration(user_id, decision.admin_notes):
        raise HTTPException(status_code=400, detail=service.error or "가입 거절에 실패했습니다")
    return {"message": "거절되었습니다", "user_id": user_id}


# =============================================
# 행사 관리
# =============================================

@router.get("/events", response_model=List[Event])
async def list_events(service: EventService = Depends(get_event_admin_service)):
    """전체 행사 (초안 포함)"""
    events = await service.fetch_events()
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return events


@router.post("/events", status_code=201)
async def create_event(
    event_data: EventCreate,
    service: EventService = Depends(get_event_admin_service)
):
    """행사 생성"""
    event_id = await service.create_event(event_data)
    if not event_id:
        raise HTTPException(status_code=400, detail=service.error or "행사 생성에 실패했습니다")
    return {"event_id": event_id}


@router.put("/events/{event_id}")
async def update_event(
    event_id: str,
    event_data: EventCreate,
    service: EventService = Depends(get_event_admin_service)
):
    """행사 수정"""
    if not await service.update_event(event_id, event_data):
        raise HTTPException(status_code=400, detail=service.error or "행사 수정에 실패했습니다")
    return {"message": "수정되었습니다", "event_id": event_id}


@router.post("/events/{event_id}/publish")
async def publish_event(
    event_id: str,
    service: EventService = Depends(get_event_admin_service)
):
    """행사 공개"""
    if not await service.publish_event(event_id):
        status_code = 404 if service.error == "Event not found" else 400
        raise HTTPException(status_code=status_code, detail=service.error or "행사 공개에 실패했습니다")
    return {"message": "공개되었습니다", "event_id": event_id}


@router.post("/events/{event_id}/cancel")
async def cancel_event(
    event_id: str,
    service: EventService = Depends(get_event_admin_service)
):
    """행사 취소"""
    if not await service.cancel_event(event_id):
        status_code = 404 if service.error == "Event not found" else 400
        raise HTTPException(status_code=status_code, detail=service.error or "행사 취소에 실패했습니다")
    return {"message": "취소되었습니다", "event_id": event_id}


@router.delete("/events/{event_id}")
async def delete_event(
    event_id: str,
    service: EventService = Depends(get_event_admin_service)
):
    """행사 삭제"""
    if not await service.delete_event(event_id):
        raise HTTPException(status_code=400, detail=service.error or "행사 삭제에 실패했습니다")
    return {"message": "삭제되었습니다", "event_id": event_id}
