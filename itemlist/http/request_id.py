"""Request ID middleware.

Reuses the caller's X-Request-Id when present, otherwise assigns a new one,
echoes it on the response and exposes it to log records for the duration
of the request.
"""

from __future__ import annotations

from contextvars import ContextVar
import uuid
from typing import Optional

_REQUEST_ID: ContextVar[Optional[str]] = ContextVar("itemlist_request_id", default=None)


def current_request_id() -> Optional[str]:
    return _REQUEST_ID.get()


class RequestIdMiddleware:
    def __init__(self, app, header_name: str = "X-Request-Id") -> None:  # type: ignore[no-untyped-def]
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    def _incoming(self, scope) -> Optional[str]:  # type: ignore[no-untyped-def]
        for key, value in scope.get("headers") or []:
            if key.lower() == self._header_key:
                text = value.decode("latin-1").strip()
                return text or None
        return None

    async def __call__(self, scope, receive, send):  # type: ignore[no-untyped-def]
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._incoming(scope) or str(uuid.uuid4())
        token = _REQUEST_ID.set(request_id)

        async def send_wrapper(message):  # type: ignore[no-untyped-def]
            if message.get("type") == "http.response.start":
                headers = list(message.get("headers") or [])
                if all(k.lower() != self._header_key for k, _ in headers):
                    headers.append((self.header_name.encode("latin-1"), request_id.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            _REQUEST_ID.reset(token)


__all__ = ["RequestIdMiddleware", "current_request_id"]
