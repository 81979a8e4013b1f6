"""Shared test fixtures for Autocorrect backend tests."""

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.middleware.rate_limiter import limiter
from app.services.gemini_client import GeminiClient, get_gemini_client

TEST_API_KEY = "test-gemini-key-0123456789"
TEST_BASE_URL = "https://gemini.test/v1beta"


def gemini_reply(text: str | None, finish_reason: str = "STOP") -> dict:
    """Build a generateContent success body carrying *text*."""
    parts = [] if text is None else [{"text": text}]
    return {
        "candidates": [
            {"content": {"parts": parts, "role": "model"}, "finishReason": finish_reason}
        ]
    }


class FakeGemini:
    """Records upstream requests and answers with queued responses.

    The last queued response is repeated once the queue runs dry.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response | Exception] = []

    def reply(self, body: dict | None = None, status_code: int = 200) -> None:
        self._responses.append(httpx.Response(status_code, json=body if body is not None else {}))

    def reply_text(self, text: str | None, finish_reason: str = "STOP") -> None:
        self.reply(gemini_reply(text, finish_reason))

    def fail(self, exc: Exception) -> None:
        self._responses.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError("FakeGemini has no queued response")
        outcome = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture(autouse=True)
def _disable_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def gemini_client(fake_gemini: FakeGemini) -> GeminiClient:
    return GeminiClient(
        api_key=TEST_API_KEY,
        model="test-model",
        base_url=TEST_BASE_URL,
        transport=httpx.MockTransport(fake_gemini.handler),
    )


@pytest_asyncio.fixture
async def client(gemini_client: GeminiClient):
    """HTTP client for the app with the upstream replaced by FakeGemini."""
    app.dependency_overrides[get_gemini_client] = lambda: gemini_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def api_key() -> str:
    """The credential the fake upstream client was built with."""
    return TEST_API_KEY
