# services/analyze_service.py
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from models.analyze_model import AnalysisResult, MoodLabel
from services.completion_client import CompletionClient
from services.errors import (
    ActivityRecommendationShapeError,
    InvalidInput,
    InvalidLanguageFormat,
    InvalidMoodLabel,
    MediaRecommendationShapeError,
    MoodAnalysisError,
)
from services.prompt_loader import list_prompts, render_prompt

logger = logging.getLogger(__name__)

LANGUAGE_CODE_RE = re.compile(r"^[a-z]{2}$")
INVALID_INPUT_MESSAGE = "Invalid input. Please provide a text string."
STAGES = ("language", "emotion", "quote", "media", "activity")
REQUIRED_PROMPTS = tuple(f"{s}_{role}" for s in STAGES for role in ("system", "user"))

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# 유틸
# =============================================================================
def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z") if dt else None


def _stage(name: str) -> Callable[[F], F]:
    """
    단계 실패 시 단계 이름과 함께 로그 후 그대로 다시 던짐.
    """
    def deco(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except MoodAnalysisError as e:
                if e.stage is None:
                    e.stage = name
                logger.error("Error in %s stage: %s (details=%s)", name, e, e.details)
                raise
        return wrapper  # type: ignore[return-value]
    return deco


def check_prompts() -> None:
    """단계별 system/user 프롬프트가 모두 있는지 확인. 빠진 게 있으면 FileNotFoundError."""
    missing = sorted(set(REQUIRED_PROMPTS) - set(list_prompts()))
    if missing:
        raise FileNotFoundError(f"missing prompts: {', '.join(missing)}")


def validate_user_input(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(INVALID_INPUT_MESSAGE, stage="input")
    return value.strip()


# =============================================================================
# 단계별 호출
# =============================================================================
@_stage("language")
def detect_language(client: CompletionClient, text: str, strict: bool = True) -> str:
    # 코드만 필요하므로 temperature 0
    raw = client.complete(
        render_prompt("language_system"),
        render_prompt("language_user", text=text),
        temperature=0,
        max_tokens=2,
        stage="language",
    )
    if not strict:
        return raw
    language = raw.lower()
    if not LANGUAGE_CODE_RE.match(language):
        logger.error("Invalid language code returned: %r", raw)
        raise InvalidLanguageFormat(raw)
    return language


@_stage("emotion")
def classify_emotion(client: CompletionClient, text: str) -> MoodLabel:
    raw = client.complete(
        render_prompt("emotion_system", moods=", ".join(MoodLabel.labels())),
        render_prompt("emotion_user", text=text),
        temperature=0.7,
        max_tokens=4,
        stage="emotion",
    )
    mood = MoodLabel.parse(raw)
    if mood is None:
        logger.error("Invalid mood returned: %r", raw)
        raise InvalidMoodLabel(raw)
    return mood


@_stage("quote")
def generate_quote(client: CompletionClient, mood: MoodLabel, language: str) -> str:
    return client.complete(
        render_prompt("quote_system"),
        render_prompt("quote_user", mood=mood.value.lower(), language=language),
        temperature=0.7,
        max_tokens=100,
        stage="quote",
    )


@_stage("media")
def recommend_media(client: CompletionClient, mood: MoodLabel, language: str, user_input: str) -> str:
    return client.complete(
        render_prompt("media_system", language=language),
        render_prompt("media_user", mood=mood.value.lower(), language=language, user_input=user_input),
        temperature=0.7,
        max_tokens=50,
        stage="media",
        shape_error=MediaRecommendationShapeError,
    )


@_stage("activity")
def recommend_activity(client: CompletionClient, mood: MoodLabel, language: str, user_input: str) -> str:
    return client.complete(
        render_prompt("activity_system", language=language),
        render_prompt("activity_user", mood=mood.value.lower(), language=language, user_input=user_input),
        temperature=0.7,
        max_tokens=80,
        stage="activity",
        shape_error=ActivityRecommendationShapeError,
    )


# =============================================================================
# 퍼블릭 서비스 API (라우터에서 import)
# =============================================================================
class MoodPipeline:
    """
    입력 검증 → 언어 감지 → 감정 분류 → 명언 → (추천 2종) 순서로 실행.
    어느 단계든 실패하면 전체 중단, 부분 결과 없음.

    client 는 외부에서 주입 (테스트에서는 가짜 클라이언트로 교체).
    """

    def __init__(
        self,
        client: CompletionClient,
        strict_language: bool = True,
        include_recommendations: bool = True,
    ):
        self.client = client
        self.strict_language = strict_language
        self.include_recommendations = include_recommendations

    def run(self, user_input: Any) -> AnalysisResult:
        text = validate_user_input(user_input)

        language = detect_language(self.client, text, strict=self.strict_language)
        mood = classify_emotion(self.client, text)
        quote = generate_quote(self.client, mood, language)

        if not self.include_recommendations:
            return AnalysisResult(mood=mood, quote=quote, language=language)

        media = recommend_media(self.client, mood, language, text)
        activity = recommend_activity(self.client, mood, language, text)

        return AnalysisResult(
            mood=mood,
            quote=quote,
            language=language,
            mediaRecommendation=media,
            activityRecommendation=activity,
            timestamp=iso(now_utc()),
        )
