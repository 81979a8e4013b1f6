"""Client for the ``/api/correct`` and ``/api/changetone`` endpoints."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx
from pydantic import ValidationError

from app.client.errors import ClientInputError, InvalidResponseError
from app.client.retry import DEFAULT_INITIAL_DELAY, DEFAULT_MAX_RETRIES, fetch_with_retry
from app.models.correction import CorrectionResult
from app.models.tone import ToneResult

logger = logging.getLogger(__name__)

CORRECT_PATH = "/api/correct"
CHANGE_TONE_PATH = "/api/changetone"


class AutocorrectApiClient:
    """Calls the proxy endpoints with retry and checks the reply shape.

    Pass *client* to share an ``httpx.AsyncClient`` (its ``base_url`` is
    used); otherwise one is created for *base_url* and closed by
    :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: httpx.AsyncClient | None = None,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_delay: float = DEFAULT_INITIAL_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        timeout: float = 90.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self._sleep = sleep

    async def __aenter__(self) -> "AutocorrectApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, path: str, payload: dict) -> object:
        return await fetch_with_retry(
            self._client,
            path,
            json=payload,
            max_retries=self.max_retries,
            initial_delay=self.initial_delay,
            sleep=self._sleep,
        )

    async def correct(self, input_text: str) -> CorrectionResult:
        """Proofread *input_text*.

        Raises ClientInputError for blank input without touching the network.
        """
        if not input_text.strip():
            raise ClientInputError("Please enter some text to correct.")

        body = await self._post(CORRECT_PATH, {"inputText": input_text})
        try:
            return CorrectionResult.model_validate(body)
        except ValidationError as exc:
            logger.error("Unexpected /api/correct reply: %s", exc.error_count())
            raise InvalidResponseError("Invalid response structure from backend function.") from exc

    async def change_tone(self, input_text: str, tone: str) -> ToneResult:
        """Rewrite *input_text* in *tone*."""
        if not input_text.strip():
            raise ClientInputError("Please enter some text to rewrite.")
        if not tone.strip():
            raise ClientInputError("Please choose a tone.")

        body = await self._post(CHANGE_TONE_PATH, {"inputText": input_text, "tone": tone})
        try:
            return ToneResult.model_validate(body)
        except ValidationError as exc:
            logger.error("Unexpected /api/changetone reply: %s", exc.error_count())
            raise InvalidResponseError("Invalid response structure from backend function.") from exc
