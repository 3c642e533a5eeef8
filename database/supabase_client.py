"""
Supabase 데이터베이스 클라이언트
"""
from typing import Optional

from supabase import create_client, Client
from loguru import logger

from app.config import get_settings


# 싱글톤 클라이언트
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Supabase 클라이언트 인스턴스 반환 (싱글톤)
    RLS가 적용되는 anon key로 접속한다
    """
    global _supabase_client
    if _supabase_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("SUPABASE_URL과 SUPABASE_KEY 환경변수를 설정해주세요")
        _supabase_client = create_client(
            settings.supabase_url,
            settings.supabase_key
        )
        logger.debug(f"Supabase 클라이언트 생성: {settings.supabase_url}")
    return _supabase_client


def reset_supabase_client() -> None:
    """캐시된 클라이언트 제거 (키 교체, 테스트용)"""
    global _supabase_client
    _supabase_client = None


def get_db() -> Client:
    """FastAPI 의존성 (테스트에서 override)"""
    return get_supabase_client()
