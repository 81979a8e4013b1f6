"""Proofreading via the upstream model's structured output."""

import logging

from pydantic import ValidationError

from app.core.errors import ClientInputError, UpstreamError
from app.core.prompts import CORRECTION_RESPONSE_SCHEMA, PROOFREADER_SYSTEM_PROMPT
from app.models.correction import CorrectionResult
from app.services.gemini_client import GeminiClient
from app.utils.json_parser import parse_json_object_from_llm_response

logger = logging.getLogger(__name__)


async def correct_text(input_text: str, client: GeminiClient) -> CorrectionResult:
    """Ask the model to proofread *input_text*.

    A reply that is not JSON, or that lacks ``correctedText`` or
    ``wrongWords``, is an UpstreamError rather than a defaulted result.
    """
    if not input_text or not input_text.strip():
        raise ClientInputError("inputText is required")

    text = await client.generate_content(
        input_text,
        PROOFREADER_SYSTEM_PROMPT,
        response_schema=CORRECTION_RESPONSE_SCHEMA,
    )
    if not text:
        raise UpstreamError("Invalid response structure from Gemini API.")

    data = parse_json_object_from_llm_response(text)
    if data is None:
        raise UpstreamError("Gemini API returned malformed JSON.")

    try:
        result = CorrectionResult.model_validate(data)
    except ValidationError as exc:
        missing = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        logger.error("Correction payload failed validation: %s", missing)
        raise UpstreamError(
            "Gemini API response is missing or has invalid fields: " + ", ".join(missing)
        ) from exc

    logger.info(
        "Correction done: %d wrong word(s), corrected_len=%d",
        len(result.wrong_words), len(result.corrected_text),
    )
    return result
