"""Request ID middleware: attaches a unique ID to every request/response.

Uses pure ASGI instead of BaseHTTPMiddleware so error responses produced by
the exception handlers still carry the header.
"""

import uuid
from typing import Any

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

REQUEST_ID_HEADER = b"x-request-id"


def get_request_id(request: Request) -> str:
    """Return the ID assigned by :class:`RequestIDMiddleware`, or ``"-"``."""
    return getattr(request.state, "request_id", "-")


class RequestIDMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = ""
        for header_name, header_value in scope.get("headers", []):
            if header_name == REQUEST_ID_HEADER:
                # Cap client-supplied IDs so they can't bloat the logs
                request_id = header_value.decode("latin-1")[:128]
                break
        if not request_id:
            request_id = uuid.uuid4().hex

        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_wrapper)
