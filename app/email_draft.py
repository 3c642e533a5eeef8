"""
Email Draft - Cohere API를 통한 이메일 초안 작성
"""
from typing import Optional, Dict, Any

import httpx
from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel

from app.config import get_settings, PortalSettings

PROMPT_TEMPLATE = "Write a professional email for this scenario: {prompt}"
NO_EMAIL_FALLBACK = "No email generated."


class EmailDraftError(Exception):
    """초안 생성 실패"""


class EmailDraftRequest(BaseModel):
    prompt: Optional[str] = None


class EmailDraftResponse(BaseModel):
    email: str


class EmailDrafter:
    """Cohere chat API 호출"""

    def __init__(self, settings: Optional[PortalSettings] = None):
        self.settings = settings or get_settings()
        self.api_key = self.settings.cohere_api_key
        self.model = self.settings.cohere_model
        self.base_url = self.settings.cohere_base_url.rstrip("/")

    async def draft(self, prompt: str) -> str:
        """
        시나리오 설명으로 이메일 초안 생성

        Raises:
            EmailDraftError: API 키 없음, HTTP 오류
        """
        if not self.api_key:
            logger.error("COHERE_API_KEY가 설정되지 않았습니다")
            raise EmailDraftError("Cohere API 키 없음")

        logger.debug(f"이메일 초안 요청: {prompt[:80]}")
        data = await self._call_cohere_api(PROMPT_TEMPLATE.format(prompt=prompt))
        return self._extract_text(data)

    async def _call_cohere_api(self, content: str) -> Dict[str, Any]:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "user", "content": content}
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.settings.http_timeout) as client:
                response = await client.post(
                    f"{self.base_url}/chat",
                    json=payload,
                    headers=headers
                )
        except httpx.HTTPError as e:
            raise EmailDraftError(f"Cohere 요청 실패: {e}") from e

        if response.status_code != 200:
            logger.error(f"Cohere API 오류: {response.status_code} - {response.text}")
            raise EmailDraftError(f"API 호출 실패: {response.status_code}")

        return response.json()

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        """v2 응답(message.content[].text), 구버전(text, generations) 순서로 확인"""
        content = (data.get("message") or {}).get("content") or []
        text = "".join(
            part.get("text", "") for part in content
            if isinstance(part, dict) and part.get("type", "text") == "text"
        )
        if text.strip():
            return text

        if data.get("text"):
            return data["text"]

        generations = data.get("generations") or []
        if generations and generations[0].get("text"):
            return generations[0]["text"]

        return NO_EMAIL_FALLBACK


router = APIRouter(tags=["Email Draft"])


def get_email_drafter() -> EmailDrafter:
    return EmailDrafter()


@router.post("/generate-email", response_model=EmailDraftResponse)
async def generate_email(
    request: EmailDraftRequest,
    drafter: EmailDrafter = Depends(get_email_drafter)
):
    """
    이메일 초안 생성

    {prompt} → {email}
    """
    if not request.prompt or not request.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt required")

    try:
        email = await drafter.draft(request.prompt)
    except EmailDraftError as e:
        logger.error(f"Cohere 오류: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate email")

    return EmailDraftResponse(email=email)
