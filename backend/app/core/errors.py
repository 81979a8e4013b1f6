"""Server-side error taxonomy for the proxy endpoints.

Each error carries the HTTP status and the machine-readable code that the
exception handlers in ``app.main`` put on the wire.
"""


class AutocorrectError(Exception):
    """Base exception for every error the API reports to its callers."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(AutocorrectError):
    """A required request field is missing or empty."""

    status_code = 400
    code = "INVALID_INPUT"


class SafetyBlockedError(AutocorrectError):
    """The upstream model refused the request on safety grounds."""

    status_code = 400
    code = "SAFETY_BLOCKED"

    def __init__(
        self,
        message: str = "The request was blocked due to safety concerns. Please modify your input.",
    ) -> None:
        super().__init__(message)


class MethodNotAllowedError(AutocorrectError):
    status_code = 405
    code = "METHOD_NOT_ALLOWED"

    def __init__(self, message: str = "Method Not Allowed") -> None:
        super().__init__(message)


class ConfigurationError(AutocorrectError):
    """The server is missing configuration it needs (e.g. the API key).

    The message returned to callers is always generic; details belong in
    the server log only.
    """

    status_code = 500
    code = "CONFIGURATION_ERROR"

    def __init__(self, message: str = "Server configuration error") -> None:
        super().__init__(message)


class UpstreamError(AutocorrectError):
    """The upstream model failed or returned an unusable payload."""

    status_code = 500
    code = "UPSTREAM_ERROR"
