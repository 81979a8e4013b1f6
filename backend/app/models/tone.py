"""Tone rewrite request/response models."""

import enum

from app.models.correction import CamelModel


class Tone(str, enum.Enum):
    """Tones with a dedicated rewrite instruction."""

    professional = "professional"
    friendly = "friendly"
    concise = "concise"


class ToneRequest(CamelModel):
    """Request to rewrite ``inputText`` in ``tone``.

    ``tone`` is free text: values outside :class:`Tone` get a generic
    instruction instead of being rejected.
    """

    input_text: str
    tone: str


class ToneResult(CamelModel):
    new_text: str
