"""System instructions and output schemas sent to the upstream model."""

import logging

from app.models.tone import Tone

logger = logging.getLogger(__name__)

PROOFREADER_SYSTEM_PROMPT = "\n".join([
    "You are an expert proofreader. Your task is to correct grammar, spelling, "
    "and punctuation errors in the provided text.",
    "You MUST respond in the requested JSON format.",
    "Your response must include:",
    "1.  'correctedText': The full, corrected version of the text.",
    "2.  'wrongWords': An array of strings. Each string must be an *exact* word or "
    "phrase from the *original* text that you identified as incorrect "
    "(e.g., 'mispelled', 'grammer', 'their are'). Only include words that were "
    "actually changed.",
])

# Structured-output schema in the upstream's OpenAPI-subset dialect.
CORRECTION_RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "correctedText": {"type": "STRING"},
        "wrongWords": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        },
    },
    "required": ["correctedText", "wrongWords"],
}

_NO_COMMENTARY = "Do not add any extra commentary, just provide the rewritten text."

TONE_PROMPTS: dict[Tone, str] = {
    Tone.professional: (
        "You are an expert editor. Rewrite the following text to be more formal, "
        "polite, and suitable for a professional business setting. " + _NO_COMMENTARY
    ),
    Tone.friendly: (
        "You are an expert editor. Rewrite the following text to be more casual, "
        "warm, and friendly, as if speaking to a colleague. Use contractions and "
        "simpler language. " + _NO_COMMENTARY
    ),
    Tone.concise: (
        "You are an expert editor. Rewrite the following text to be as clear and "
        "concise as possible. Remove all filler words, repetition, and unnecessary "
        "phrases. " + _NO_COMMENTARY
    ),
}


def build_tone_prompt(tone: str) -> str:
    """Return the rewrite instruction for *tone*.

    Unknown tones fall back to a generic instruction naming the tone verbatim.
    """
    try:
        return TONE_PROMPTS[Tone(tone)]
    except ValueError:
        logger.warning("Unknown tone received: %s", tone)
        return (
            "You are an expert writing assistant. "
            f"Please rewrite the following text in a {tone} tone."
        )
