"""
Admin Module - 포털 관리자 기능
"""
from .router import router as admin_router
from .registrations import RegistrationService

__all__ = ["admin_router", "RegistrationService"]
