import json
import httpx
import pytest
from fastapi.testclient import TestClient
from app.application.gemini_corrector import GeminiCorrector
from app.core.config import Settings
from app.infrastructure.routes import get_corrector, get_settings
from app.main import app


class FakeGemini:
    """Scripted stand-in for the generateContent endpoint."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {}
        self.error = None

    def reply(self, status_code=200, body=None, content=None):
        self.status_code = status_code
        self.body = body if content is None else content
        return self

    def fail(self, error):
        self.error = error
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def calls(self):
        return len(self.requests)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def test_settings():
    return Settings(gemini_api_key="test-key", gemini_model="gemini-1.5-flash")


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def corrector(test_settings, fake_gemini):
    return GeminiCorrector(test_settings, transport=httpx.MockTransport(fake_gemini))


@pytest.fixture
def client(test_settings, corrector):
    app.dependency_overrides[get_corrector] = lambda: corrector
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
