"""
Auth Dependencies

인증 및 권한 체크 의존성
"""

from fastapi import Depends, HTTPException, status, Request
from supabase import Client
from loguru import logger

from database.supabase_client import get_db
from .models import CurrentUser, UserRole, UserStatus


def _extract_bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="인증이 필요합니다"
        )
    return auth_header.split(" ", 1)[1].strip()


async def get_current_user(
    request: Request,
    supabase: Client = Depends(get_db)
) -> CurrentUser:
    """
    현재 로그인한 사용자 조회

    1. Bearer 토큰을 Supabase Auth로 검증
    2. users 테이블에서 역할/승인 상태 조회
    """
    token = _extract_bearer_token(request)

    try:
        user_response = supabase.auth.get_user(token)

        if not user_response or not user_response.user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="유효하지 않은 토큰입니다"
            )

        auth_id = user_response.user.id

        user_result = supabase.table("users").select(
            "id, email, full_name, role, user_status, is_active, club_admin"
        ).eq("id", auth_id).limit(1).execute()

        if not user_result.data:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="포털 회원 등록이 필요합니다"
            )

        row = user_result.data[0]
        user = CurrentUser(
            id=row["id"],
            email=row.get("email") or "",
            full_name=row.get("full_name") or "",
            role=UserRole(row.get("role") or UserRole.STUDENT.value),
            user_status=UserStatus(row.get("user_status") or UserStatus.ACTIVE.value),
            is_active=row.get("is_active", True) is not False,
            club_admin=row.get("club_admin")
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.warning(f"인증 오류: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"인증 오류: {str(e)}"
        )

    if not user.can_use_portal():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"승인되지 않은 계정입니다 ({user.user_status.value})"
        )

    return user


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """포털 관리자 권한 필요"""
    if not user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="관리자 권한이 필요합니다"
        )
    return user
