"""
Event Models
"""

from datetime import date, datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class EventStatus(str, Enum):
    """행사 상태"""
    draft = "draft"
    published = "published"
    cancelled = "cancelled"


class EventCreate(BaseModel):
    """행사 생성/수정 (관리자)"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str
    category: str
    start_date: date
    start_time: str
    location: str
    end_date: Optional[date] = None
    end_time: Optional[str] = None
    max_participants: Optional[int] = Field(None, gt=0)
    registration_deadline: Optional[date] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    is_public: bool = True
    requires_approval: bool = False
    status: EventStatus = EventStatus.draft


class Event(BaseModel):
    """행사"""
    id: str
    title: str
    description: Optional[str] = ""
    category: Optional[str] = None
    start_date: date
    start_time: Optional[str] = None
    end_date: Optional[date] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    max_participants: Optional[int] = None
    registration_deadline: Optional[date] = None
    contact_person: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    is_public: bool = True
    requires_approval: bool = False
    status: EventStatus = EventStatus.draft
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    registrations_count: int = 0


class EventRegistrationRequest(BaseModel):
    notes: Optional[str] = None


class UserEvent(BaseModel):
    """내가 신청한 행사 (최근 활동)"""
    id: str
    title: str
    start_date: date
    start_time: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    registration_status: Optional[str] = None
    registered_at: Optional[datetime] = None
