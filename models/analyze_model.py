# models/analyze_model.py
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class MoodLabel(str, Enum):
    SAD = "Sad"
    HAPPY = "Happy"
    EXCITED = "Excited"
    MOTIVATED = "Motivated"
    STRESSED = "Stressed"
    ANGRY = "Angry"

    @classmethod
    def labels(cls) -> list[str]:
        return [m.value for m in cls]

    @classmethod
    def parse(cls, raw: str) -> Optional["MoodLabel"]:
        """정확히 일치하는 라벨만 허용 (대소문자 구분). 없으면 None."""
        try:
            return cls(raw)
        except ValueError:
            return None


class AnalyzeMoodRequest(BaseModel):
    # 타입 검사는 파이프라인에서 직접 (pydantic 422 대신 400 응답을 내기 위함)
    userInput: Any = None


class AnalysisResult(BaseModel):
    mood: MoodLabel
    quote: str
    language: str
    mediaRecommendation: Optional[str] = None
    activityRecommendation: Optional[str] = None
    timestamp: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
