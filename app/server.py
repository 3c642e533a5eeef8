"""
Campus Portal - FastAPI 웹 서버
동아리 구독/멤버십, 관리자 승인, 행사, 소셜 피드, 분실물, 학습 자료, 알림, 업로드, 이메일 초안 API

데이터 소스: Supabase (RLS + RPC)
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.config import get_settings
from app.club import club_router
from app.admin import admin_router
from app.events import events_router
from app.lost_found import lost_found_router
from app.notifications import notifications_router
from app.resources import resources_router
from app.social import social_router
from app.uploads import router as uploads_router
from app.email_draft import router as email_router

settings = get_settings()

# FastAPI 앱
app = FastAPI(
    title="Campus Portal",
    description="대학 학생활동 포털 백엔드 (동아리, 행사, 소셜, 분실물, 자료, 가입 승인)",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

# 라우터 등록
app.include_router(club_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(events_router, prefix="/api")
app.include_router(social_router, prefix="/api")
app.include_router(lost_found_router, prefix="/api")
app.include_router(resources_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(uploads_router, prefix="/api")
app.include_router(email_router, prefix="/api")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """처리되지 않은 예외는 로그만 남기고 500"""
    logger.exception(f"처리되지 않은 오류: {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
async def startup_event():
    """서버 시작"""
    logger.info(f"Campus Portal 시작 (CORS: {', '.join(settings.cors_origin_list) or '-'})")
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("SUPABASE_URL/SUPABASE_KEY가 설정되지 않음. DB 요청은 실패합니다.")


@app.get("/api/health")
async def health():
    """헬스 체크"""
    return {
        "status": "ok",
        "supabase_configured": bool(settings.supabase_url and settings.supabase_key),
        "cloudinary_configured": bool(settings.cloudinary_cloud_name and settings.cloudinary_upload_preset),
        "cohere_configured": bool(settings.cohere_api_key),
    }


# ==================== 서버 실행 ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
