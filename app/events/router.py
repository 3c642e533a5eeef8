"""
Event Router

사용자용 행사 API (공개 행사, 참가 신청, 내 신청 내역)
관리자용 행사 관리는 app/admin/router.py
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from supabase import Client

from app.auth.dependencies import get_current_user
from app.auth.models import CurrentUser
from database.supabase_client import get_db
from .models import Event, EventRegistrationRequest, UserEvent
from .service import EventService

router = APIRouter(prefix="/events", tags=["Events"])


def get_event_service(
    user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_db)
) -> EventService:
    return EventService(user.id, supabase)


@router.get("", response_model=List[Event])
async def list_published_events(service: EventService = Depends(get_event_service)):
    """공개된 행사"""
    events = await service.fetch_published_events()
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return events


@router.get("/my/registrations")
async def my_registrations(service: EventService = Depends(get_event_service)):
    """내 신청 내역"""
    registrations = await service.get_user_registrations()
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return registrations


@router.get("/my/recent", response_model=List[UserEvent])
async def my_recent_events(service: EventService = Depends(get_event_service)):
    """최근 신청한 행사 5개"""
    events = await service.get_recent_user_events()
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return events


@router.post("/{event_id}/register", status_code=201)
async def register_for_event(
    event_id: str,
    body: Optional[EventRegistrationRequest] = None,
    service: EventService = Depends(get_event_service)
):
    """행사 참가 신청"""
    notes = body.notes if body else None
    if not await service.register_for_event(event_id, notes):
        raise HTTPException(status_code=400, detail=service.error or "신청에 실패했습니다")
    return {"message": "신청되었습니다", "event_id": event_id}
