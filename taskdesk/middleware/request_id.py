"""Request ID middleware.

Accepts a client X-Request-ID only when it is short and made of safe
characters, otherwise issues a new one. The id is echoed on the response,
stored on request.state and bound to the request context so every log line
of the request carries it. Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import uuid
from typing import Callable

from taskdesk.shared.context import bind_request, reset_request

REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def _header(scope: dict, name: bytes) -> str | None:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1").strip()
    return None


def resolve_request_id(raw: str | None) -> str:
    """Return raw when it is a safe id; otherwise a new uuid4 hex."""
    if raw and REQUEST_ID_PATTERN.match(raw):
        return raw
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap app so each HTTP request runs inside its own request context."""
    header_key = header_name.lower().encode("latin-1")

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header(scope, header_key))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header_key, request_id.encode("latin-1")),
                ]
            await send(message)

        tokens = bind_request(request_id)
        try:
            await app(scope, receive, send_with_id)
        finally:
            reset_request(tokens)

    return asgi_app
