"""
Lost & Found Models
"""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class LostFoundStatus(str, Enum):
    """분실물 상태"""
    lost = "lost"         # 분실 신고
    found = "found"       # 습득 신고
    claimed = "claimed"   # 주인 찾음


class LostFoundCreate(BaseModel):
    """분실/습득 신고"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str
    location: str
    status: LostFoundStatus = LostFoundStatus.lost
    image_url: Optional[str] = None


class LostFoundUpdate(BaseModel):
    """분실물 정보 수정 (보낸 필드만 반영)"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None


class LostFoundStatusUpdate(BaseModel):
    status: LostFoundStatus


class LostFoundItem(BaseModel):
    """분실물 게시글"""
    id: str
    title: str
    description: Optional[str] = ""
    location: Optional[str] = ""
    user_id: str
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    status: LostFoundStatus = LostFoundStatus.lost
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
