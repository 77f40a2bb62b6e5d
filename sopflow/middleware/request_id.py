"""Request correlation id (raw ASGI middleware).

Each HTTP request gets an id: the caller's header value when it is short and
made of [A-Za-z0-9_-], a fresh UUID4 otherwise. The id is stored on
request.state.request_id (error logs include it) and echoed on the response.
"""

import re
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

MAX_REQUEST_ID_LENGTH = 64
_SAFE_ID = re.compile(rf"^[A-Za-z0-9_-]{{1,{MAX_REQUEST_ID_LENGTH}}}$")


def resolve_request_id(candidate: str | None) -> str:
    """Keep a well-formed caller id; anything else is replaced."""
    value = (candidate or "").strip()
    return value if _SAFE_ID.match(value) else str(uuid.uuid4())


class RequestIDMiddleware:
    """Attach a correlation id to every HTTP request and its response."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    def _incoming(self, scope: Scope) -> str | None:
        for key, value in scope.get("headers", []):
            if key.lower() == self._header_key:
                return value.decode("latin-1")
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = resolve_request_id(self._incoming(scope))
        scope.setdefault("state", {})["request_id"] = request_id
        header = (self._header_key, request_id.encode("latin-1"))

        async def send_with_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [*message.get("headers", []), header]
            await send(message)

        await self.app(scope, receive, send_with_id)
