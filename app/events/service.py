"""
Event Service

행사 관리 RPC 래퍼
- 관리자: 생성/수정/삭제/공개/취소 (변경 후 목록 다시 조회)
- 사용자: 공개 행사 조회, 참가 신청, 내 신청 내역
"""

from typing import Optional, List, Dict, Any
from loguru import logger
from supabase import Client

from database.supabase_client import get_supabase_client
from .models import Event, EventCreate, EventStatus, UserEvent

EVENT_REGISTRATIONS_TABLE = "event_registrations"
EVENTS_TABLE = "events"
RECENT_EVENTS_LIMIT = 5


def _event_rpc_params(event_data: EventCreate) -> Dict[str, Any]:
    """EventCreate → RPC 파라미터 (_ 접두사, 빈 값은 null)"""
    params: Dict[str, Any] = {
        "_title": event_data.title,
        "_description": event_data.description,
        "_category": event_data.category,
        "_start_date": event_data.start_date.isoformat(),
        "_start_time": event_data.start_time,
        "_location": event_data.location,
    }
    for field in ["end_time", "max_participants", "contact_person", "contact_email", "contact_phone"]:
        params[f"_{field}"] = getattr(event_data, field) or None
    for field in ["end_date", "registration_deadline"]:
        value = getattr(event_data, field)
        params[f"_{field}"] = value.isoformat() if value else None

    params["_is_public"] = event_data.is_public
    params["_requires_approval"] = event_data.requires_approval
    params["_status"] = event_data.status.value
    return params


class EventService:
    """행사 서비스"""

    def __init__(self, user_id: str, supabase: Optional[Client] = None):
        self.user_id = user_id
        self.supabase = supabase or get_supabase_client()
        self.events: List[Event] = []
        self.error: Optional[str] = None

    # =============================================
    # 관리자
    # =============================================

    async def fetch_events(self) -> List[Event]:
        """전체 행사 (관리자, 초안 포함)"""
        try:
            result = self.supabase.rpc("get_all_events_admin").execute()
            self.events = [Event(**row) for row in (result.data or [])]
            self.error = None
        except Exception as e:
            logger.error(f"행사 목록 조회 오류: {e}")
            self.error = "Failed to fetch events"
        return self.events

    async def create_event(self, event_data: EventCreate) -> Optional[str]:
        """행사 생성, 새 event_id 반환"""
        params = _event_rpc_params(event_data)
        params["_created_by"] = self.user_id

        try:
            result = self.supabase.rpc("create_event_admin", params).execute()
        except Exception as e:
            logger.error(f"행사 생성 오류: {e}")
            self.error = "Failed to create event"
            return None

        logger.info(f"행사 생성: {event_data.title} by {self.user_id}")
        await self.fetch_events()
        return result.data

    async def update_event(self, event_id: str, event_data: EventCreate) -> bool:
        """행사 수정 (상태 포함)"""
        params = _event_rpc_params(event_data)
        params["_event_id"] = event_id
        params["_user_id"] = self.user_id
        return await self._call_mutation("update_event_admin", params, "행사 수정")

    async def delete_event(self, event_id: str) -> bool:
        return await self._call_mutation("delete_event_admin", {
            "_event_id": event_id,
            "_user_id": self.user_id
        }, "행사 삭제")

    async def publish_event(self, event_id: str) -> bool:
        return await self._change_status(event_id, EventStatus.published)

    async def cancel_event(self, event_id: str) -> bool:
        return await self._change_status(event_id, EventStatus.cancelled)

    async def _change_status(self, event_id: str, status: EventStatus) -> bool:
        """현재 값 그대로 두고 상태만 바꿔 update_event_admin 호출"""
        if not self.events:
            await self.fetch_events()

        event = next((e for e in self.events if e.id == event_id), None)
        if event is None:
            self.error = "Event not found"
            return False

        fields = event.model_dump(include=set(EventCreate.model_fields))
        fields["status"] = status
        return await self.update_event(event_id, EventCreate(**fields))

    async def _call_mutation(self, rpc_name: str, params: Dict[str, Any], label: str) -> bool:
        try:
            result = self.supabase.rpc(rpc_name, params).execute()
        except Exception as e:
            logger.error(f"{label} 오류: {e}")
            self.error = f"{label} 실패"
            return False

        if result.data is False:
            logger.warning(f"{label} 거부됨: event={params.get('_event_id')}")
            self.error = f"{label} 실패"
            return False

        logger.info(f"{label}: event={params.get('_event_id')}")
        await self.fetch_events()
        return True

    # =============================================
    # 사용자
    # =============================================

    async def fetch_published_events(self) -> List[Event]:
        """공개된 행사"""
        try:
            result = self.supabase.rpc("get_published_events").execute()
            return [Event(**row) for row in (result.data or [])]
        except Exception as e:
            logger.error(f"공개 행사 조회 오류: {e}")
            self.error = "Failed to fetch events"
            return []

    async def register_for_event(self, event_id: str, notes: Optional[str] = None) -> bool:
        """행사 참가 신청 (정원/마감 검사는 RPC가 처리)"""
        try:
            result = self.supabase.rpc("register_for_event", {
                "_event_id": event_id,
                "_user_id": self.user_id,
                "_notes": notes or None
            }).execute()
        except Exception as e:
            logger.error(f"행사 신청 오류: event={event_id} user={self.user_id}: {e}")
            self.error = "Failed to register for event"
            return False

        if result.data is False:
            self.error = "Failed to register for event"
            return False

        logger.info(f"행사 신청: event={event_id} user={self.user_id}")
        return True

    async def get_user_registrations(self) -> List[Dict[str, Any]]:
        """내 신청 내역 (RPC 결과 그대로)"""
        try:
            result = self.supabase.rpc("get_user_registrations", {
                "_user_id": self.user_id
            }).execute()
            return result.data or []
        except Exception as e:
            logger.error(f"신청 내역 조회 오류: user={self.user_id}: {e}")
            self.error = "Failed to fetch registrations"
            return []

    async def get_recent_user_events(self, limit: int = RECENT_EVENTS_LIMIT) -> List[UserEvent]:
        """
        최근 신청한 행사

        1. event_registrations (최근 신청순, limit)
        2. events in_(event_id)
        3. 신청 순서대로 병합, 삭제된 행사는 제외
        """
        try:
            regs = self.supabase.table(EVENT_REGISTRATIONS_TABLE).select(
                "event_id, status, registered_at"
            ).eq("user_id", self.user_id).order(
                "registered_at", desc=True
            ).limit(limit).execute().data or []

            if not regs:
                return []

            events = self.supabase.table(EVENTS_TABLE).select(
                "id, title, start_date, start_time, location, category"
            ).in_("id", [r["event_id"] for r in regs]).execute().data or []
        except Exception as e:
            logger.error(f"최근 행사 조회 오류: user={self.user_id}: {e}")
            self.error = "Failed to fetch user events"
            return []

        by_id = {event["id"]: event for event in events}
        return [
            UserEvent(
                **by_id[reg["event_id"]],
                registration_status=reg.get("status"),
                registered_at=reg.get("registered_at")
            )
            for reg in regs
            if reg["event_id"] in by_id
        ]
