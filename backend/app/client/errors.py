"""Errors raised on the calling side of the proxy endpoints."""


class ClientError(Exception):
    """Base exception for client-side failures."""


class ClientInputError(ClientError):
    """Input rejected locally, before any request is made."""


class ApiRequestError(ClientError):
    """The backend answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseError(ClientError):
    """The backend answered 2xx but the body does not have the expected shape."""


class RetryExhaustedError(ClientError):
    """Every attempt failed; carries the last underlying error."""

    def __init__(self, last_error: BaseException, attempts: int) -> None:
        super().__init__(str(last_error))
        self.last_error = last_error
        self.attempts = attempts
