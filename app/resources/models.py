"""
Resource Models

학습 자료는 외부 링크로 공유한다. 링크는 file_type 컬럼에 저장된다.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


def _check_link(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.startswith("http"):
        raise ValueError("자료 링크는 http(s) URL이어야 합니다")
    return v


class ResourceCreate(BaseModel):
    """자료 등록"""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: str
    subject: Optional[str] = None
    course_code: Optional[str] = None
    tags: Optional[List[str]] = None
    resource_link: str

    @field_validator("resource_link")
    @classmethod
    def link_is_http(cls, v):
        return _check_link(v)


class ResourceUpdate(BaseModel):
    """자료 수정 (보낸 필드만 반영)"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    subject: Optional[str] = None
    course_code: Optional[str] = None
    tags: Optional[List[str]] = None
    resource_link: Optional[str] = None

    @field_validator("resource_link")
    @classmethod
    def link_is_http(cls, v):
        return _check_link(v)


class Resource(BaseModel):
    """학습 자료"""
    id: str
    title: str
    description: Optional[str] = None
    file_path: Optional[str] = ""
    file_type: Optional[str] = None  # 자료 링크
    uploaded_by: str
    category: Optional[str] = None
    subject: Optional[str] = None
    course_code: Optional[str] = None
    tags: Optional[List[str]] = None
    download_count: int = 0
    is_approved: Optional[bool] = None
    created_at: Optional[datetime] = None

    @field_validator("download_count", mode="before")
    @classmethod
    def null_count(cls, v):
        return v or 0

    @property
    def resource_link(self) -> Optional[str]:
        return self.file_type


class ResourceFilters(BaseModel):
    """목록 필터 ("All"은 필터 없음)"""
    category: Optional[str] = None
    subject: Optional[str] = None
    course_code: Optional[str] = None
    search: Optional[str] = None
