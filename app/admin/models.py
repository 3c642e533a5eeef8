"""
Admin Models

가입 승인 대기 목록 모델
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class PendingRegistration(BaseModel):
    """가입 승인 대기 사용자 (get_pending_registrations RPC 결과)"""
    user_id: str
    email: str
    full_name: str
    student_id: Optional[str] = None
    department: Optional[str] = None
    registered_at: Optional[datetime] = None
    document_id: Optional[str] = None
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None


class RegistrationDecision(BaseModel):
    """승인/거절 메모"""
    admin_notes: Optional[str] = None


class SignedUrlResponse(BaseModel):
    """학생증 열람 URL"""
    file_path: str
    signed_url: str
    expires_in: int
