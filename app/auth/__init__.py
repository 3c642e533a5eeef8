"""
Auth Module - Supabase Auth 토큰 기반 사용자 인증
"""
from .models import UserRole, UserStatus, CurrentUser
from .dependencies import get_current_user, require_admin

__all__ = [
    "UserRole",
    "UserStatus",
    "CurrentUser",
    "get_current_user",
    "require_admin",
]
