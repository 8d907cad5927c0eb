import pytest
from fastapi.testclient import TestClient

from config import Settings
from dependencies import get_completion_client, get_settings
from services.errors import UpstreamShapeError


class FakeCompletionClient:
    """
    단계 이름별로 미리 정한 응답(문자열) 또는 예외를 돌려주는 가짜 클라이언트.
    None 이면 빈 응답으로 보고 shape 에러를 던짐.
    """

    def __init__(self, replies=None):
        self.replies = {
            "language": "en",
            "emotion": "Sad",
            "quote": "Every ending is a new beginning.",
            "media": "Maybe listen to Coldplay - Fix You, it might help you feel less alone.",
            "activity": "You seem sad, maybe sketching a plan for your job search could lift your spirits.",
        }
        self.replies.update(replies or {})
        self.calls = []

    @property
    def stages(self):
        return [c["stage"] for c in self.calls]

    def call_for(self, stage):
        return next(c for c in self.calls if c["stage"] == stage)

    def complete(self, system_prompt, user_prompt, temperature, max_tokens,
                 stage=None, shape_error=UpstreamShapeError):
        self.calls.append({
            "stage": stage,
            "system": system_prompt,
            "user": user_prompt,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        reply = self.replies.get(stage)
        if isinstance(reply, Exception):
            raise reply
        if reply is None:
            raise shape_error(f"Invalid response from completion API for {stage}", stage=stage)
        return reply


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def app_settings():
    return Settings()


@pytest.fixture
def client(fake_client, app_settings):
    from main import app

    app.dependency_overrides[get_completion_client] = lambda: fake_client
    app.dependency_overrides[get_settings] = lambda: app_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
