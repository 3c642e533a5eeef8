"""
Social Models

소셜 피드 게시글/댓글 Pydantic 모델 정의
"""

from datetime import datetime
from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, Field, field_validator


class PostType(str, Enum):
    """게시글 유형"""
    text = "text"
    image = "image"
    video = "video"
    link = "link"
    announcement = "announcement"
    event = "event"


class PostVisibility(str, Enum):
    """공개 범위"""
    public = "public"
    group = "group"
    club = "club"
    private = "private"


# =============================================
# 게시글
# =============================================

class PostCreate(BaseModel):
    """게시글 작성"""
    content: str = Field(..., min_length=1)
    post_type: PostType = PostType.text
    media_urls: Optional[List[str]] = None
    external_link: Optional[str] = None
    is_announcement: bool = False
    visibility: PostVisibility = PostVisibility.public
    group_id: Optional[str] = None
    club_id: Optional[str] = None

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("내용을 입력해주세요")
        return v


class SocialPost(BaseModel):
    """피드 게시글 (get_social_feed RPC 결과)"""
    id: str
    user_id: str
    group_id: Optional[str] = None
    club_id: Optional[str] = None
    content: str
    post_type: PostType = PostType.text
    media_urls: Optional[List[str]] = None
    external_link: Optional[str] = None
    is_announcement: bool = False
    is_pinned: bool = False
    visibility: PostVisibility = PostVisibility.public
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0
    author_name: Optional[str] = None
    author_avatar: Optional[str] = None
    author_department: Optional[str] = None
    group_name: Optional[str] = None
    club_name: Optional[str] = None
    is_liked: bool = False
    is_author: bool = False


class FeedPage(BaseModel):
    """피드 한 페이지"""
    posts: List[SocialPost]
    page: int
    has_more: bool


class LikeStatus(BaseModel):
    post_id: str
    liked: bool


# =============================================
# 댓글
# =============================================

class CommentCreate(BaseModel):
    """댓글 작성 (대댓글은 parent_comment_id)"""
    content: str = Field(..., min_length=1)
    parent_comment_id: Optional[str] = None


class PostComment(BaseModel):
    """게시글 댓글"""
    id: str
    post_id: str
    user_id: str
    parent_comment_id: Optional[str] = None
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    likes_count: int = 0
    author_name: str = "Unknown User"
    author_avatar: Optional[str] = None
    is_liked: bool = False
    is_author: bool = False
