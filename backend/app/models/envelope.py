"""Error response body shared by every endpoint."""

from pydantic import BaseModel


class ErrorBody(BaseModel):
    """Body of every non-2xx response.

    ``error`` is the human-readable message clients surface; ``code`` names
    the error category.
    """

    error: str
    code: str


def error_response(message: str, code: str) -> dict:
    """Build an error body dict."""
    return ErrorBody(error=message, code=code).model_dump()
