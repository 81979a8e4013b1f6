"""Proofreading endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.middleware.rate_limiter import LLM_LIMIT, limiter
from app.models.correction import CorrectionRequest, CorrectionResult
from app.services.correction_service import correct_text
from app.services.gemini_client import GeminiClient, get_gemini_client

router = APIRouter()


@router.post("", response_model=CorrectionResult)
@limiter.limit(LLM_LIMIT)
async def correct_endpoint(
    request: Request,
    body: CorrectionRequest,
    client: Annotated[GeminiClient, Depends(get_gemini_client)],
) -> CorrectionResult:
    """Return the corrected text and the original phrases that were changed."""
    return await correct_text(body.input_text, client)
