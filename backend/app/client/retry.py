"""HTTP calls with exponential-backoff retry.

Every failure is retried the same way: transport errors, non-2xx statuses
and unreadable bodies alike. Waits double from ``initial_delay`` with no
jitter and no cap.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.client.errors import ApiRequestError, RetryExhaustedError

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_DELAY = 1.0


def _error_message(response: httpx.Response) -> str:
    """Server-supplied ``error`` message, or the bare status."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return f"HTTP error! status: {response.status_code}"


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Attempt %d failed (%s); retrying in %.1fs",
        retry_state.attempt_number, exc, retry_state.upcoming_sleep,
    )


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    *,
    method: str = "POST",
    json: Any = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_delay: float = DEFAULT_INITIAL_DELAY,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> Any:
    """Send a request, retrying up to *max_retries* times on any failure.

    Returns the parsed JSON body of the first successful response. After the
    last retry fails, raises RetryExhaustedError with the last error's
    message.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=initial_delay, exp_base=2),
        retry=retry_if_exception_type(Exception),
        before_sleep=_log_retry,
        sleep=sleep,
    )
    try:
        async for attempt in retrying:
            with attempt:
                response = await client.request(method, url, json=json)
                if not response.is_success:
                    raise ApiRequestError(_error_message(response), response.status_code)
                return response.json()
    except RetryError as exc:
        last_error = exc.last_attempt.exception()
        logger.error("Giving up on %s %s after %d attempts", method, url, exc.last_attempt.attempt_number)
        raise RetryExhaustedError(last_error, exc.last_attempt.attempt_number) from last_error
