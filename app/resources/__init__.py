"""
Resources Module - 학습 자료 공유
"""
from .router import router as resources_router
from .models import Resource, ResourceCreate
from .service import ResourceService

__all__ = ["resources_router", "Resource", "ResourceCreate", "ResourceService"]
