"""
Auth Models - 포털 사용자 모델
"""
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    """포털 역할"""
    ADMIN = "admin"      # 대학 스태프/관리자
    FACULTY = "faculty"  # 교직원
    STUDENT = "student"  # 학생


class UserStatus(str, Enum):
    """가입 승인 상태"""
    PENDING = "pending"      # 학생증 검토 대기
    ACTIVE = "active"        # 승인 완료
    SUSPENDED = "suspended"  # 정지
    REJECTED = "rejected"    # 가입 거부


class CurrentUser:
    """요청을 보낸 사용자 컨텍스트"""

    def __init__(
        self,
        id: str,
        email: str,
        full_name: str,
        role: UserRole,
        user_status: UserStatus = UserStatus.ACTIVE,
        is_active: bool = True,
        club_admin: Optional[str] = None
    ):
        self.id = id
        self.email = email
        self.full_name = full_name
        self.role = role
        self.user_status = user_status
        self.is_active = is_active
        self.club_admin = club_admin  # 동아리 관리자로 지정된 경우 club_id

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_club_admin(self, club_id: str) -> bool:
        """해당 동아리 관리자인지 (포털 관리자는 모든 동아리)"""
        return self.is_admin() or (self.club_admin is not None and self.club_admin == club_id)

    def can_use_portal(self) -> bool:
        return self.is_active and self.user_status == UserStatus.ACTIVE
