"""
Uploads - 이미지/문서 업로드

- Cloudinary unsigned upload (프로필 이미지, 동아리 로고/이미지)
- Supabase Storage 서명 URL (학생증 등 비공개 문서)
"""
from typing import Optional
from urllib.parse import urlparse

import httpx
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from loguru import logger
from supabase import Client

from app.auth.dependencies import get_current_user
from app.auth.models import CurrentUser
from app.config import get_settings, PortalSettings

CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"
CLOUDINARY_DELIVERY_BASE = "https://res.cloudinary.com"


class UploadError(Exception):
    """업로드 실패"""


class CloudinaryUploader:
    """Cloudinary 이미지 업로드"""

    def __init__(self, settings: Optional[PortalSettings] = None):
        self.settings = settings or get_settings()
        self.cloud_name = self.settings.cloudinary_cloud_name
        self.upload_preset = self.settings.cloudinary_upload_preset
        self.timeout = self.settings.http_timeout

    @property
    def upload_url(self) -> str:
        return f"{CLOUDINARY_API_BASE}/{self.cloud_name}/image/upload"

    async def upload_image(
        self,
        data: bytes,
        filename: str,
        folder: Optional[str] = None,
        content_type: str = "application/octet-stream"
    ) -> str:
        """
        이미지 업로드 후 secure_url 반환

        Raises:
            UploadError: 설정 누락, HTTP 오류, secure_url 없음
        """
        if not self.cloud_name or not self.upload_preset:
            raise UploadError("Cloudinary 설정이 없습니다 (CLOUDINARY_CLOUD_NAME, CLOUDINARY_UPLOAD_PRESET)")

        form = {
            "upload_preset": self.upload_preset,
            "folder": folder or self.settings.cloudinary_default_folder,
        }
        files = {"file": (filename, data, content_type)}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.upload_url, data=form, files=files)
        except httpx.HTTPError as e:
            logger.error(f"Cloudinary 요청 오류: {e}")
            raise UploadError(f"업로드 요청 실패: {e}") from e

        if response.status_code != 200:
            logger.error(f"Cloudinary 오류: {response.status_code} - {response.text}")
            raise UploadError(f"업로드 실패: {response.status_code}")

        secure_url = response.json().get("secure_url")
        if not secure_url:
            raise UploadError("Upload failed")

        logger.info(f"이미지 업로드 완료: {secure_url}")
        return secure_url

    def get_optimized_image_url(self, url: str, width: int = 400, height: int = 400) -> str:
        """얼굴 중심 crop + 자동 포맷 변환 URL"""
        public_id = extract_public_id(url)
        if not public_id:
            return url
        return (
            f"{CLOUDINARY_DELIVERY_BASE}/{self.cloud_name}/image/upload/"
            f"w_{width},h_{height},c_fill,g_face,f_auto/{public_id}"
        )


def extract_public_id(url: str) -> Optional[str]:
    """
    Cloudinary URL에서 public_id 추출

    .../image/upload/v1712345678/profile-images/abc.jpg → profile-images/abc
    """
    if not url:
        return None

    parts = urlparse(url).path.split("/")
    try:
        upload_index = parts.index("upload")
    except ValueError:
        return None

    # upload 다음은 버전 세그먼트
    if upload_index + 2 >= len(parts):
        return None

    public_id_with_ext = "/".join(parts[upload_index + 2:])
    return public_id_with_ext.split(".")[0] or None


def create_signed_url(
    supabase: Client,
    bucket: str,
    path: str,
    expires_in: int
) -> Optional[str]:
    """Supabase Storage 서명 URL (실패 시 None)"""
    try:
        result = supabase.storage.from_(bucket).create_signed_url(path, expires_in)
    except Exception as e:
        logger.error(f"서명 URL 생성 오류: {bucket}/{path}: {e}")
        return None

    if not result:
        return None
    return result.get("signedURL") or result.get("signedUrl")


# =============================================
# API
# =============================================

router = APIRouter(prefix="/uploads", tags=["Uploads"])


def get_uploader() -> CloudinaryUploader:
    return CloudinaryUploader()


@router.post("/image")
async def upload_image(
    file: UploadFile = File(...),
    folder: Optional[str] = Form(None),
    user: CurrentUser = Depends(get_current_user),
    uploader: CloudinaryUploader = Depends(get_uploader)
):
    """이미지 업로드 (Cloudinary)"""
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="빈 파일입니다")

    try:
        url = await uploader.upload_image(
            data,
            file.filename or "upload",
            folder=folder,
            content_type=file.content_type or "application/octet-stream"
        )
    except UploadError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {"url": url, "optimized_url": uploader.get_optimized_image_url(url)}
