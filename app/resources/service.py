"""
Resource Service

학습 자료 공유
- 목록: 카테고리/과목/과목코드 필터 + 제목/설명 검색
- 수정/삭제: 등록자 본인 또는 포털 관리자
- 다운로드: 카운트 증가 후 링크 반환
"""

from typing import Optional, List, Dict, Any
from loguru import logger
from supabase import Client

from app.auth.models import CurrentUser
from app.config import get_settings
from app.uploads import create_signed_url
from database.supabase_client import get_supabase_client
from .models import Resource, ResourceCreate, ResourceFilters, ResourceUpdate

RESOURCES_TABLE = "resources"
ALL = "All"


class ResourceService:
    """학습 자료 서비스"""

    def __init__(self, user: Optional[CurrentUser], supabase: Optional[Client] = None):
        self.user = user
        self.supabase = supabase or get_supabase_client()
        self.settings = get_settings()
        self.resources: List[Resource] = []
        self.error: Optional[str] = None

    async def fetch_resources(self, filters: Optional[ResourceFilters] = None) -> List[Resource]:
        """자료 목록 (최신순)"""
        filters = filters or ResourceFilters()
        try:
            query = self.supabase.table(RESOURCES_TABLE).select("*").order("created_at", desc=True)
            for column in ("category", "subject", "course_code"):
                value = getattr(filters, column)
                if value and value != ALL:
                    query = query.eq(column, value)
            if filters.search:
                query = query.or_(
                    f"title.ilike.%{filters.search}%,description.ilike.%{filters.search}%"
                )
            result = query.execute()
            self.resources = [Resource(**row) for row in (result.data or [])]
            self.error = None
        except Exception as e:
            logger.error(f"자료 조회 오류: {e}")
            self.error = str(e) or "Failed to fetch resources"
        return self.resources

    async def create_resource(self, resource: ResourceCreate) -> Optional[Dict[str, Any]]:
        """자료 등록 (링크는 file_type에 저장)"""
        if not self.user:
            self.error = "User must be authenticated"
            return None

        data: Dict[str, Any] = {
            "title": resource.title,
            "description": resource.description,
            "file_path": "",
            "file_type": resource.resource_link,
            "uploaded_by": self.user.id,
            "category": resource.category,
        }
        for field in ("subject", "course_code", "tags"):
            value = getattr(resource, field)
            if value:
                data[field] = value

        try:
            result = self.supabase.table(RESOURCES_TABLE).insert(data).execute()
        except Exception as e:
            logger.error(f"자료 등록 오류: user={self.user.id}: {e}")
            self.error = str(e) or "Failed to create resource"
            return None

        if not result.data:
            return None

        created = result.data[0]
        logger.info(f"자료 등록: resource={created['id']} user={self.user.id}")
        self.resources.insert(0, Resource(**created))
        return created

    async def update_resource(self, resource_id: str, updates: ResourceUpdate) -> Optional[Dict[str, Any]]:
        """자료 수정"""
        if not self.user:
            self.error = "User must be authenticated"
            return None

        data = updates.model_dump(exclude_unset=True)
        if "resource_link" in data:
            link = data.pop("resource_link")
            if link:
                data["file_type"] = link
        if not data:
            self.error = "변경할 항목이 없습니다"
            return None

        try:
            query = self.supabase.table(RESOURCES_TABLE).update(data).eq("id", resource_id)
            if not self.user.is_admin():
                query = query.eq("uploaded_by", self.user.id)
            result = query.execute()
        except Exception as e:
            logger.error(f"자료 수정 오류: resource={resource_id}: {e}")
            self.error = str(e)
            return None

        if not result.data:
            self.error = "Resource not found"
            return None

        updated = result.data[0]
        self.resources = [
            Resource(**updated) if r.id == resource_id else r
            for r in self.resources
        ]
        logger.info(f"자료 수정: resource={resource_id}")
        return updated

    async def record_download(self, resource_id: str) -> Optional[str]:
        """다운로드 카운트 증가, 자료 링크 반환 (링크가 잘못되면 None)"""
        try:
            rows = self.supabase.table(RESOURCES_TABLE).select(
                "id, file_type, download_count"
            ).eq("id", resource_id).execute().data or []
        except Exception as e:
            logger.error(f"자료 조회 오류: resource={resource_id}: {e}")
            self.error = str(e)
            return None

        if not rows:
            self.error = "Resource not found"
            return None

        row = rows[0]
        link = row.get("file_type")
        if not link or not link.startswith("http"):
            self.error = "Invalid resource link"
            return None

        count = (row.get("download_count") or 0) + 1
        try:
            self.supabase.table(RESOURCES_TABLE).update(
                {"download_count": count}
            ).eq("id", resource_id).execute()
        except Exception as e:
            # 카운트 실패해도 링크는 돌려준다
            logger.warning(f"다운로드 카운트 갱신 오류: resource={resource_id}: {e}")

        for r in self.resources:
            if r.id == resource_id:
                r.download_count = count
        return link

    async def delete_resource(self, resource_id: str) -> bool:
        """자료 삭제 (스토리지 파일이 있으면 함께 삭제)"""
        if not self.user:
            return False

        try:
            query = self.supabase.table(RESOURCES_TABLE).select("id, file_path").eq("id", resource_id)
            if not self.user.is_admin():
                query = query.eq("uploaded_by", self.user.id)
            rows = query.execute().data or []
        except Exception as e:
            logger.error(f"자료 조회 오류: resource={resource_id}: {e}")
            self.error = str(e)
            return False

        if not rows:
            return False

        file_path = rows[0].get("file_path")
        if file_path:
            try:
                self.supabase.storage.from_(self.settings.resources_bucket).remove([file_path])
            except Exception as e:
                logger.warning(f"자료 파일 삭제 오류: {file_path}: {e}")

        try:
            self.supabase.table(RESOURCES_TABLE).delete().eq("id", resource_id).execute()
        except Exception as e:
            logger.error(f"자료 삭제 오류: resource={resource_id}: {e}")
            self.error = str(e)
            return False

        self.resources = [r for r in self.resources if r.id != resource_id]
        logger.info(f"자료 삭제: resource={resource_id}")
        return True

    def get_preview_url(self, file_path: str) -> Optional[str]:
        """업로드된 자료 파일 미리보기 URL"""
        return create_signed_url(
            self.supabase,
            self.settings.resources_bucket,
            file_path,
            self.settings.resource_preview_expires_in
        )
