"""
Lost & Found Router
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import Client

from app.auth.dependencies import get_current_user
from app.auth.models import CurrentUser
from database.supabase_client import get_db
from .models import (
    LostFoundCreate,
    LostFoundItem,
    LostFoundStatus,
    LostFoundStatusUpdate,
    LostFoundUpdate,
)
from .service import LostFoundService

router = APIRouter(prefix="/lost-found", tags=["Lost & Found"])


def get_lost_found_service(
    user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_db)
) -> LostFoundService:
    return LostFoundService(user, supabase)


@router.get("", response_model=List[LostFoundItem])
async def list_items(
    status: Optional[LostFoundStatus] = None,
    mine: bool = Query(False, description="내 게시글만"),
    service: LostFoundService = Depends(get_lost_found_service)
):
    """분실물 목록 (상태별, 내 게시글 필터)"""
    items = await service.fetch_items()
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)

    if mine:
        items = service.get_user_items()
    if status:
        items = [item for item in items if item.status == status]
    return items


@router.post("", status_code=201)
async def create_item(
    item: LostFoundCreate,
    service: LostFoundService = Depends(get_lost_found_service)
):
    """분실/습득 신고"""
    created = await service.create_item(item)
    if not created:
        raise HTTPException(status_code=500, detail=service.error or "Failed to create item")
    return created


@router.patch("/{item_id}")
async def update_item(
    item_id: str,
    updates: LostFoundUpdate,
    service: LostFoundService = Depends(get_lost_found_service)
):
    """분실물 정보 수정 (작성자/관리자)"""
    updated = await service.update_item(item_id, updates)
    if not updated:
        raise HTTPException(status_code=404, detail=service.error or "Item not found")
    return updated


@router.patch("/{item_id}/status")
async def update_item_status(
    item_id: str,
    body: LostFoundStatusUpdate,
    service: LostFoundService = Depends(get_lost_found_service)
):
    """상태 변경 (작성자/관리자)"""
    updated = await service.update_item_status(item_id, body.status)
    if not updated:
        raise HTTPException(status_code=404, detail=service.error or "Item not found")
    return updated


@router.delete("/{item_id}")
async def delete_item(
    item_id: str,
    service: LostFoundService = Depends(get_lost_found_service)
):
    """분실물 삭제 (작성자/관리자)"""
    if not await service.delete_item(item_id):
        raise HTTPException(status_code=404, detail="삭제할 수 있는 게시글이 없습니다")
    return {"message": "삭제되었습니다", "item_id": item_id}
