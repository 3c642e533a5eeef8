"""
Social Feed Service

소셜 피드 게시글/좋아요/댓글
- 피드는 get_social_feed RPC로 페이지 단위 조회 (작성자/동아리 이름, is_liked 포함)
- 좋아요는 post_likes 행 존재 여부로 판단 ((post_id, user_id) 유니크)
- 삭제는 본인 글/댓글만
"""

from typing import Optional, List, Dict, Any
from loguru import logger
from supabase import Client

from database.supabase_client import get_supabase_client
from .models import PostCreate, PostComment, SocialPost

POSTS_TABLE = "social_posts"
LIKES_TABLE = "post_likes"
COMMENTS_TABLE = "post_comments"
USERS_TABLE = "users"

FEED_PAGE_SIZE = 20


class SocialFeedService:
    """소셜 피드 서비스 (요청 단위로 생성)"""

    def __init__(self, user_id: Optional[str], supabase: Optional[Client] = None):
        self.user_id = user_id
        self.supabase = supabase or get_supabase_client()

        self.posts: List[SocialPost] = []
        self.page = 0
        self.has_more = True
        self.comments: List[PostComment] = []
        self.error: Optional[str] = None

    # =============================================
    # 피드
    # =============================================

    async def fetch_social_feed(self, page: int = 0) -> List[SocialPost]:
        """피드 페이지 조회 (page * FEED_PAGE_SIZE 부터)"""
        if not self.user_id:
            return self.posts

        try:
            result = self.supabase.rpc("get_social_feed", {
                "_user_id": self.user_id,
                "_limit": FEED_PAGE_SIZE,
                "_offset": page * FEED_PAGE_SIZE
            }).execute()
        except Exception as e:
            logger.error(f"소셜 피드 조회 오류: user={self.user_id}: {e}")
            self.error = "Failed to fetch social feed"
            return self.posts

        rows = result.data or []
        self.posts = [SocialPost(**row) for row in rows]
        self.page = page
        self.has_more = len(rows) == FEED_PAGE_SIZE
        self.error = None
        return self.posts

    async def create_post(self, post: PostCreate) -> Optional[str]:
        """게시글 작성 후 첫 페이지 재조회, 새 게시글 ID 반환"""
        if not self.user_id:
            self.error = "User not authenticated"
            return None

        data: Dict[str, Any] = {
            "user_id": self.user_id,
            "content": post.content,
            "post_type": post.post_type.value,
            "media_urls": post.media_urls or None,
            "external_link": post.external_link or None,
            "is_announcement": post.is_announcement,
            "visibility": post.visibility.value,
            "group_id": post.group_id or None,
            "club_id": post.club_id or None,
        }

        try:
            result = self.supabase.table(POSTS_TABLE).insert(data).execute()
        except Exception as e:
            logger.error(f"게시글 작성 오류: user={self.user_id}: {e}")
            self.error = "Failed to create post"
            return None

        if not result.data:
            self.error = "Failed to create post"
            return None

        post_id = result.data[0]["id"]
        logger.info(f"게시글 작성: post={post_id} user={self.user_id}")
        await self.fetch_social_feed(0)
        return post_id

    async def toggle_post_like(self, post_id: str) -> Optional[bool]:
        """
        좋아요 토글

        Returns:
            토글 후 좋아요 여부, 실패 시 None
        """
        if not self.user_id:
            return None

        try:
            existing = self.supabase.table(LIKES_TABLE).select("id").eq(
                "post_id", post_id
            ).eq("user_id", self.user_id).limit(1).execute()

            if existing.data:
                self.supabase.table(LIKES_TABLE).delete().eq(
                    "post_id", post_id
                ).eq("user_id", self.user_id).execute()
                liked = False
            else:
                self.supabase.table(LIKES_TABLE).insert({
                    "post_id": post_id,
                    "user_id": self.user_id
                }).execute()
                liked = True
        except Exception as e:
            logger.error(f"좋아요 변경 오류: post={post_id} user={self.user_id}: {e}")
            self.error = str(e)
            return None

        # 로드된 피드가 있으면 카운터만 맞춤
        for post in self.posts:
            if post.id == post_id:
                post.is_liked = liked
                post.likes_count = max(0, post.likes_count + (1 if liked else -1))

        return liked

    async def delete_post(self, post_id: str) -> bool:
        """본인 게시글 삭제"""
        if not self.user_id:
            return False

        try:
            result = self.supabase.table(POSTS_TABLE).delete().eq(
                "id", post_id
            ).eq("user_id", self.user_id).execute()
        except Exception as e:
            logger.error(f"게시글 삭제 오류: post={post_id}: {e}")
            self.error = str(e)
            return False

        if not result.data:
            logger.warning(f"삭제할 게시글 없음: post={post_id} user={self.user_id}")
            return False

        self.posts = [p for p in self.posts if p.id != post_id]
        logger.info(f"게시글 삭제: post={post_id}")
        return True

    # =============================================
    # 댓글
    # =============================================

    async def fetch_comments(self, post_id: str) -> List[PostComment]:
        """게시글 댓글 (작성 순, 작성자 이름 포함)"""
        try:
            result = self.supabase.table(COMMENTS_TABLE).select("*").eq(
                "post_id", post_id
            ).order("created_at").execute()
        except Exception as e:
            logger.error(f"댓글 조회 오류: post={post_id}: {e}")
            self.error = "Failed to fetch comments"
            return self.comments

        rows = result.data or []
        authors = self._fetch_authors(row["user_id"] for row in rows)

        self.comments = [
            PostComment(
                **row,
                author_name=(authors.get(row["user_id"]) or {}).get("full_name") or "Unknown User",
                author_avatar=(authors.get(row["user_id"]) or {}).get("avatar_url"),
                is_author=row["user_id"] == self.user_id
            )
            for row in rows
        ]
        self.error = None
        return self.comments

    def _fetch_authors(self, user_ids) -> Dict[str, Dict[str, Any]]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}

        try:
            result = self.supabase.table(USERS_TABLE).select(
                "id, full_name, avatar_url"
            ).in_("id", ids).execute()
        except Exception as e:
            # 이름 없이 계속 진행
            logger.warning(f"댓글 작성자 조회 오류: {e}")
            return {}

        return {user["id"]: user for user in (result.data or [])}

    async def add_comment(
        self,
        post_id: str,
        content: str,
        parent_comment_id: Optional[str] = None
    ) -> bool:
        """댓글 작성 후 댓글 목록 재조회"""
        if not self.user_id or not post_id:
            return False

        try:
            self.supabase.table(COMMENTS_TABLE).insert({
                "post_id": post_id,
                "user_id": self.user_id,
                "parent_comment_id": parent_comment_id or None,
                "content": content
            }).execute()
        except Exception as e:
            logger.error(f"댓글 작성 오류: post={post_id} user={self.user_id}: {e}")
            self.error = str(e)
            return False

        await self.fetch_comments(post_id)
        return True

    async def delete_comment(self, comment_id: str) -> bool:
        """본인 댓글 삭제"""
        if not self.user_id:
            return False

        try:
            result = self.supabase.table(COMMENTS_TABLE).delete().eq(
                "id", comment_id
            ).eq("user_id", self.user_id).execute()
        except Exception as e:
            logger.error(f"댓글 삭제 오류: comment={comment_id}: {e}")
            self.error = str(e)
            return False

        if not result.data:
            return False

        self.comments = [c for c in self.comments if c.id != comment_id]
        return True
