"""Client for the Gemini ``generateContent`` endpoint.

One request per call: retries are the browser client's job, not the proxy's.
The API key travels in the ``x-goog-api-key`` header so it never shows up in
URLs, logs, or error messages.
"""

import logging

import httpx

from app.config import settings
from app.core.errors import ConfigurationError, SafetyBlockedError, UpstreamError

logger = logging.getLogger(__name__)

SAFETY_FINISH_REASONS = frozenset({"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"})


class GeminiClient:
    """Thin async wrapper around ``models/{model}:generateContent``."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 60.0,
        connect_timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def generate_content(
        self,
        text: str,
        system_instruction: str,
        *,
        response_schema: dict | None = None,
    ) -> str | None:
        """Send *text* with *system_instruction* and return the generated text.

        When *response_schema* is given the model is asked for JSON matching
        it. Returns None when the reply has no text part at all.
        """
        if not self.configured:
            logger.error("GEMINI_API_KEY is missing from the environment")
            raise ConfigurationError()

        payload = build_payload(text, system_instruction, response_schema=response_schema)
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }

        logger.info(
            "POST %s  text_len=%d  structured=%s",
            self.url, len(text), response_schema is not None,
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Gemini API request failed: %s", type(exc).__name__)
            raise UpstreamError(f"Gemini API request failed: {type(exc).__name__}") from exc

        logger.info("Gemini response status: %d", response.status_code)
        if not response.is_success:
            message = upstream_error_message(response)
            logger.error("Gemini API error (%d): %s", response.status_code, message)
            raise UpstreamError(message)

        try:
            result = response.json()
        except ValueError as exc:
            raise UpstreamError("Gemini API returned a non-JSON response.") from exc

        return extract_candidate_text(result)


def build_payload(
    text: str,
    system_instruction: str,
    *,
    response_schema: dict | None = None,
) -> dict:
    """Build the generateContent request body."""
    payload: dict = {
        "contents": [{"parts": [{"text": text}]}],
        "systemInstruction": {"parts": [{"text": system_instruction}]},
    }
    if response_schema is not None:
        payload["generationConfig"] = {
            "responseMimeType": "application/json",
            "responseSchema": response_schema,
        }
    return payload


def upstream_error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of an upstream error envelope."""
    fallback = f"Gemini API failed with status {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        if isinstance(message, str) and message:
            return message
    return fallback


def extract_candidate_text(result: dict) -> str | None:
    """Return the first candidate's first text part.

    Raises SafetyBlockedError when the prompt or the candidate was blocked.
    Returns None when the text part is structurally absent; an empty string
    is returned as-is.
    """
    if not isinstance(result, dict):
        return None

    feedback = result.get("promptFeedback") or {}
    if isinstance(feedback, dict) and feedback.get("blockReason"):
        logger.warning("Gemini blocked the prompt: %s", feedback["blockReason"])
        raise SafetyBlockedError()

    candidates = result.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    candidate = candidates[0]

    finish_reason = candidate.get("finishReason")
    if finish_reason in SAFETY_FINISH_REASONS:
        logger.warning("Gemini stopped generation: finishReason=%s", finish_reason)
        raise SafetyBlockedError()

    content = candidate.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    return text if isinstance(text, str) else None


def get_gemini_client() -> GeminiClient:
    """FastAPI dependency: the upstream client built from settings."""
    return GeminiClient(
        api_key=settings.gemini_api_key.get_secret_value(),
        model=settings.gemini_model,
        base_url=settings.gemini_api_url,
        timeout=settings.upstream_timeout_seconds,
        connect_timeout=settings.upstream_connect_timeout_seconds,
    )
