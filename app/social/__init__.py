"""
Social Module - 소셜 피드 (게시글, 좋아요, 댓글)
"""
from .router import router as social_router
from .models import PostCreate, SocialPost, PostComment
from .service import SocialFeedService

__all__ = ["social_router", "PostCreate", "SocialPost", "PostComment", "SocialFeedService"]
