"""Tone rewriting via the upstream model (plain-text output)."""

import logging

from app.core.errors import ClientInputError, UpstreamError
from app.core.prompts import build_tone_prompt
from app.models.tone import ToneResult
from app.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


async def change_tone(input_text: str, tone: str, client: GeminiClient) -> ToneResult:
    """Rewrite *input_text* in *tone*.

    Only a structurally missing text part is an error; an empty rewrite is
    passed through.
    """
    if not input_text or not input_text.strip() or not tone or not tone.strip():
        raise ClientInputError("inputText and tone are required")

    system_prompt = build_tone_prompt(tone)
    new_text = await client.generate_content(input_text, system_prompt)
    if new_text is None:
        logger.error("Gemini response missing text for tone=%s", tone)
        raise UpstreamError("Invalid response structure from Gemini API (missing text).")

    return ToneResult(new_text=new_text.strip())
