"""Request context passed through the server's middleware chain."""

from __future__ import annotations

from typing import Optional

from serve_static import StaticResponse
from serve_static.resolver import PLAIN_TEXT


class RequestContext:
    """Mutable per-request context; a route answers by sending a response."""

    def __init__(self, url: str):
        self._url = url
        self._response: Optional[StaticResponse] = None
        self._sent = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def path(self) -> str:
        return self._url.split("?", 1)[0].split("#", 1)[0]

    @property
    def response(self) -> Optional[StaticResponse]:
        return self._response

    @property
    def sent(self) -> bool:
        return self._sent

    def send_raw(self, response: StaticResponse) -> "RequestContext":
        if self._sent:
            raise RuntimeError("Response already sent for this request")
        self._response = response
        return self

    def send_text(self, status: int, text: str) -> "RequestContext":
        return self.send_raw(
            StaticResponse(
                status=status,
                headers={"Content-Type": PLAIN_TEXT},
                body=text.encode("utf-8"),
            )
        )

    def force_send(self) -> "RequestContext":
        if self._response is None:
            raise RuntimeError("No response to send")
        self._sent = True
        return self
