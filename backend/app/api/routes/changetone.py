"""Tone rewrite endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.middleware.rate_limiter import LLM_LIMIT, limiter
from app.models.tone import ToneRequest, ToneResult
from app.services.gemini_client import GeminiClient, get_gemini_client
from app.services.tone_service import change_tone

router = APIRouter()


@router.post("", response_model=ToneResult)
@limiter.limit(LLM_LIMIT)
async def change_tone_endpoint(
    request: Request,
    body: ToneRequest,
    client: Annotated[GeminiClient, Depends(get_gemini_client)],
) -> ToneResult:
    """Rewrite ``inputText`` in the requested tone."""
    return await change_tone(body.input_text, body.tone, client)
