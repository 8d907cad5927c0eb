# services/completion_client.py
from __future__ import annotations

import logging
from typing import Any, Optional, Type

from openai import OpenAI, OpenAIError

from services.errors import UpstreamCallError, UpstreamShapeError

logger = logging.getLogger(__name__)


def build_openai_client(api_key: str, base_url: str) -> OpenAI:
    """
    프로세스당 1회 생성해서 재사용 (thread-safe).
    재시도 없음: 단계별 호출은 항상 1회.
    """
    return OpenAI(api_key=api_key, base_url=base_url, max_retries=0)


def _first_content(resp: Any) -> Optional[str]:
    choices = getattr(resp, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    if message is None:
        return None
    content = getattr(message, "content", None)
    if not content:
        return None
    return content.strip() or None


class CompletionClient:
    """chat.completions 호출 1회 = complete() 1회."""

    def __init__(self, sdk: OpenAI, model: str):
        self.sdk = sdk
        self.model = model

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
        stage: Optional[str] = None,
        shape_error: Type[UpstreamShapeError] = UpstreamShapeError,
    ) -> str:
        try:
            resp = self.sdk.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except OpenAIError as e:
            raise UpstreamCallError(
                f"Completion call failed ({stage or 'completion'})",
                stage=stage,
                details=str(e),
            ) from e

        text = _first_content(resp)
        if text is None:
            logger.error("Invalid response from completion API (%s): %r", stage, resp)
            raise shape_error(
                f"Invalid response from completion API for {stage or 'completion'}",
                stage=stage,
            )
        return text
