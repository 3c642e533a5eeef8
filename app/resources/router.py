"""
Resource Router
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import Client

from app.auth.dependencies import get_current_user
from app.auth.models import CurrentUser
from database.supabase_client import get_db
from .models import Resource, ResourceCreate, ResourceFilters, ResourceUpdate
from .service import ResourceService

router = APIRouter(prefix="/resources", tags=["Resources"])


def get_resource_service(
    user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_db)
) -> ResourceService:
    return ResourceService(user, supabase)


@router.get("", response_model=List[Resource])
async def list_resources(
    category: Optional[str] = None,
    subject: Optional[str] = None,
    course_code: Optional[str] = None,
    search: Optional[str] = None,
    service: ResourceService = Depends(get_resource_service)
):
    """자료 목록 ("All"은 필터 없음)"""
    resources = await service.fetch_resources(ResourceFilters(
        category=category, subject=subject, course_code=course_code, search=search
    ))
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return resources


@router.post("", status_code=201)
async def create_resource(
    resource: ResourceCreate,
    service: ResourceService = Depends(get_resource_service)
):
    """자료 등록"""
    created = await service.create_resource(resource)
    if not created:
        raise HTTPException(status_code=500, detail=service.error or "Failed to create resource")
    return created


@router.get("/preview-url")
async def get_preview_url(
    file_path: str = Query(..., min_length=1),
    service: ResourceService = Depends(get_resource_service)
):
    """자료 파일 미리보기용 서명 URL"""
    signed_url = service.get_preview_url(file_path)
    if not signed_url:
        raise HTTPException(status_code=404, detail="파일을 찾을 수 없습니다")
    return {
        "file_path": file_path,
        "signed_url": signed_url,
        "expires_in": service.settings.resource_preview_expires_in
    }


@router.patch("/{resource_id}")
async def update_resource(
    resource_id: str,
    updates: ResourceUpdate,
    service: ResourceService = Depends(get_resource_service)
):
    """자료 수정 (등록자/관리자)"""
    updated = await service.update_resource(resource_id, updates)
    if not updated:
        raise HTTPException(status_code=404, detail=service.error or "Resource not found")
    return updated


@router.post("/{resource_id}/download")
async def download_resource(
    resource_id: str,
    service: ResourceService = Depends(get_resource_service)
):
    """다운로드 카운트 증가 후 링크 반환"""
    link = await service.record_download(resource_id)
    if not link:
        status_code = 404 if service.error == "Resource not found" else 400
        raise HTTPException(status_code=status_code, detail=service.error)
    return {"resource_id": resource_id, "resource_link": link}


@router.delete("/{resource_id}")
async def delete_resource(
    resource_id: str,
    service: ResourceService = Depends(get_resource_service)
):
    """자료 삭제 (등록자/관리자)"""
    if not await service.delete_resource(resource_id):
        raise HTTPException(status_code=404, detail="삭제할 수 있는 자료가 없습니다")
    return {"message": "삭제되었습니다", "resource_id": resource_id}
