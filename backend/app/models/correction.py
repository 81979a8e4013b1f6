"""Correction request/response models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CorrectionRequest(CamelModel):
    """Request for a proofreading pass over ``inputText``."""

    input_text: str


class CorrectionResult(CamelModel):
    """Corrected text plus the phrases of the original that were changed.

    Both fields are required: a payload missing either one is rejected
    instead of being defaulted.
    """

    corrected_text: str
    wrong_words: list[str]

    def unique_wrong_words(self) -> list[str]:
        """Wrong words with duplicates removed, first occurrence wins."""
        return list(dict.fromkeys(self.wrong_words))
