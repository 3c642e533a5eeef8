"""
Portal Config - 포털 백엔드 설정

환경변수 또는 .env 파일에서 읽어온다.
"""
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class PortalSettings(BaseSettings):
    """포털 설정"""

    # Supabase
    supabase_url: str = Field(default="", description="Supabase Project URL")
    supabase_key: str = Field(default="", description="Supabase anon key")
    supabase_service_key: str = Field(default="", description="Supabase service role key")

    # Cloudinary (unsigned upload)
    cloudinary_cloud_name: str = Field(default="", description="Cloudinary cloud name")
    cloudinary_upload_preset: str = Field(default="", description="Unsigned upload preset")
    cloudinary_default_folder: str = "profile-images"

    # Cohere
    cohere_api_key: str = Field(default="", description="Cohere API key")
    cohere_model: str = "command-a-03-2025"
    cohere_base_url: str = "https://api.cohere.com/v2"

    # Storage
    student_id_bucket: str = "student-ids"
    signed_url_expires_in: int = Field(default=3600, description="서명 URL 유효시간 (초)")
    resources_bucket: str = "resources"
    resource_preview_expires_in: int = Field(default=900, description="자료 미리보기 URL 유효시간 (초)")

    # HTTP
    cors_origins: str = Field(default="http://localhost:6006", description="쉼표로 구분된 허용 Origin")
    http_timeout: float = Field(default=30.0, description="외부 API 타임아웃 (초)")

    # 로깅
    log_level: str = "INFO"
    log_dir: str = "logs"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> PortalSettings:
    return PortalSettings()
