# services/errors.py
from typing import Optional


class MoodAnalysisError(Exception):
    """
    파이프라인 공통 예외.
    stage: 실패한 단계 이름 (language / emotion / quote / media / activity)
    details: 원인 메시지 (개발 모드에서만 응답에 노출)
    """

    def __init__(self, message: str, stage: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message)
        self.stage = stage
        self.details = details if details is not None else message


class InvalidInput(MoodAnalysisError):
    """userInput 이 비었거나 문자열이 아님 → 400"""


class UnsupportedMethod(MoodAnalysisError):
    """POST / OPTIONS 이외 메서드 → 405"""


class UpstreamCallError(MoodAnalysisError):
    """SDK 호출 자체 실패 (네트워크/인증/레이트리밋)"""


class UpstreamShapeError(MoodAnalysisError):
    """호출은 성공했지만 choices/message/content 가 비어 있음"""


class MediaRecommendationShapeError(UpstreamShapeError):
    pass


class ActivityRecommendationShapeError(UpstreamShapeError):
    pass


class InvalidLanguageFormat(MoodAnalysisError):
    def __init__(self, value: str):
        super().__init__(f"Invalid language code format: {value!r}", stage="language")
        self.value = value


class InvalidMoodLabel(MoodAnalysisError):
    def __init__(self, value: str):
        super().__init__(f"API returned invalid emotion: {value}", stage="emotion")
        self.value = value
