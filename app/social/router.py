"""
Social Router

소셜 피드 API
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from supabase import Client

from app.auth.dependencies import get_current_user
from app.auth.models import CurrentUser
from database.supabase_client import get_db
from .models import CommentCreate, FeedPage, LikeStatus, PostComment, PostCreate
from .service import SocialFeedService

router = APIRouter(prefix="/social", tags=["Social"])


def get_social_service(
    user: CurrentUser = Depends(get_current_user),
    supabase: Client = Depends(get_db)
) -> SocialFeedService:
    return SocialFeedService(user.id, supabase)


# =============================================
# 게시글
# =============================================

@router.get("/feed", response_model=FeedPage)
async def get_feed(
    page: int = Query(0, ge=0),
    service: SocialFeedService = Depends(get_social_service)
):
    """피드 (20개씩)"""
    posts = await service.fetch_social_feed(page)
    if service.error:
        raise HTTPException(status_code=500, detail=service.error)
    return FeedPage(posts=posts, page=service.page, has_more=service.has_more)


@router.post("/posts", status_code=201)
async def create_post(
    post: PostCreate,
    service: SocialFeedService = Depends(get_social_service)
):
    """게시글 작성"""
    post_id = await service.create_post(post)
    if not post_id:
        raise HTTPException(status_code=500, detail=service.error or "Failed to create post")
    return {"post_id": post_id}


@router.delete("/posts/{post_id}")
async def delete_post(
    post_id: str,
    service: SocialFeedService = Depends(get_social_service)
):
    """본인 게시글 삭제"""
    if not await service.delete_post(post_id):
        raise HTTPException(status_code=404, detail="삭제할 수 있는 게시글이 없습니다")
    return {"message": "삭제되었습니다", "post_id": post_id}


@router.post("/posts/{post_id}/like", response_model=LikeStatus)
async def toggle_like(
    post_id: str,
    service: SocialFeedService = Depends(get_social_service)
):
    """좋아요 토글"""
    liked = await service.toggle_post_like(post_id)
    if liked is None:
        raise HTTPException(status_code=400, detail="좋아요 변경에 실패했습니다")
    return LikeStatus(post_id=post_id, liked=liked)


# =============================================
# 댓글
# =============================================

@router.get("/posts/{post_id}/comments", response_model=List[PostComment])
async def list_comments(
    post_id: str,
    service: SocialFeedService = Depends(get_social_service)
):
    """댓글 목록"""
    return await service.fetch_comments(post_id)


@router.post("/posts/{post_id}/comments", response_model=List[PostComment], status_code=201)
async def add_comment(
    post_id: str,
    comment: CommentCreate,
    service: SocialFeedService = Depends(get_social_service)
):
    """댓글 작성 (갱신된 댓글 목록 반환)"""
    if not await service.add_comment(post_id, comment.content, comment.parent_comment_id):
        raise HTTPException(status_code=400, detail="댓글 작성에 실패했습니다")
    return service.comments


@router.delete("/comments/{comment_id}")
async def delete_comment(
    comment_id: str,
    service: SocialFeedService = Depends(get_social_service)
):
    """본인 댓글 삭제"""
    if not await service.delete_comment(comment_id):
        raise HTTPException(status_code=404, detail="삭제할 수 있는 댓글이 없습니다")
    return {"message": "삭제되었습니다", "comment_id": comment_id}
