# dependencies.py
from functools import lru_cache

from fastapi import Depends

from config import Settings
from services.analyze_service import MoodPipeline
from services.completion_client import CompletionClient, build_openai_client


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def _shared_client() -> CompletionClient:
    # 프로세스 전체에서 하나의 SDK 핸들 공유
    s = get_settings()
    return CompletionClient(build_openai_client(s.api_key, s.base_url), model=s.model)


def get_completion_client() -> CompletionClient:
    return _shared_client()


def get_pipeline(
    client: CompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings),
) -> MoodPipeline:
    return MoodPipeline(
        client,
        strict_language=settings.strict_language,
        include_recommendations=settings.include_recommendations,
    )
