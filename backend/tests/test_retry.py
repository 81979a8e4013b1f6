"""Tests for fetch_with_retry."""

from unittest.mock import AsyncMock, call

import httpx
import pytest

from app.client.errors import ApiRequestError, RetryExhaustedError
from app.client.retry import fetch_with_retry


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://backend")


class _Script:
    """MockTransport handler that plays back a list of outcomes."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


async def test_success_first_try_does_not_sleep():
    script = _Script(httpx.Response(200, json={"ok": True}))
    sleep = AsyncMock()

    async with _client(script) as client:
        result = await fetch_with_retry(client, "/api/correct", json={}, sleep=sleep)

    assert result == {"ok": True}
    assert script.calls == 1
    sleep.assert_not_awaited()


async def test_fails_twice_then_succeeds_with_backoff():
    script = _Script(
        httpx.Response(500, json={"error": "boom"}),
        httpx.ConnectError("refused"),
        httpx.Response(200, json={"correctedText": "x", "wrongWords": []}),
    )
    sleep = AsyncMock()

    async with _client(script) as client:
        result = await fetch_with_retry(client, "/api/correct", json={"inputText": "x"}, sleep=sleep)

    assert result == {"correctedText": "x", "wrongWords": []}
    assert script.calls == 3
    assert sleep.await_args_list == [call(1.0), call(2.0)]


async def test_always_failing_raises_after_three_retries():
    script = _Script(
        httpx.Response(500, json={"error": "first"}),
        httpx.Response(500, json={"error": "second"}),
        httpx.Response(500, json={"error": "third"}),
        httpx.Response(500, json={"error": "Server configuration error"}),
    )
    sleep = AsyncMock()

    async with _client(script) as client:
        with pytest.raises(RetryExhaustedError) as excinfo:
            await fetch_with_retry(client, "/api/correct", json={}, max_retries=3, sleep=sleep)

    assert script.calls == 4
    assert sleep.await_args_list == [call(1.0), call(2.0), call(4.0)]
    assert str(excinfo.value) == "Server configuration error"
    assert isinstance(excinfo.value.last_error, ApiRequestError)
    assert excinfo.value.last_error.status_code == 500
    assert excinfo.value.attempts == 4


async def test_error_without_message_uses_status():
    script = _Script(httpx.Response(502, text="Bad Gateway"))

    async with _client(script) as client:
        with pytest.raises(RetryExhaustedError, match="HTTP error! status: 502"):
            await fetch_with_retry(client, "/x", max_retries=0, sleep=AsyncMock())

    assert script.calls == 1


async def test_initial_delay_scales_backoff():
    script = _Script(httpx.ConnectError("down"))
    sleep = AsyncMock()

    async with _client(script) as client:
        with pytest.raises(RetryExhaustedError) as excinfo:
            await fetch_with_retry(
                client, "/x", max_retries=2, initial_delay=0.5, sleep=sleep,
            )

    assert sleep.await_args_list == [call(0.5), call(1.0)]
    assert isinstance(excinfo.value.last_error, httpx.ConnectError)


async def test_unreadable_success_body_is_retried():
    script = _Script(
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"newText": "hi"}),
    )

    async with _client(script) as client:
        result = await fetch_with_retry(client, "/api/changetone", json={}, sleep=AsyncMock())

    assert result == {"newText": "hi"}
    assert script.calls == 2
