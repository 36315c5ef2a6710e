"""Adapter exposing a resolver as framework middleware."""

from __future__ import annotations

from typing import Callable, Protocol, TypeVar

from .resolver import StaticResponse

UNHANDLED_STATUSES = frozenset({403, 404})


class MiddlewareContext(Protocol):
    """Framework request context consumed by the static middleware."""

    @property
    def url(self) -> str:
        ...

    def send_raw(self, response: StaticResponse) -> "MiddlewareContext":
        ...

    def force_send(self) -> "MiddlewareContext":
        ...


ContextT = TypeVar("ContextT", bound=MiddlewareContext)


def adapt(
    resolve: Callable[[str], StaticResponse],
    handle_errors: bool,
) -> Callable[[ContextT], ContextT]:
    """Wrap ``resolve`` so it answers through a framework context.

    With ``handle_errors`` off, 403 and 404 outcomes leave the context
    untouched so the framework can try its next route.
    """

    def middleware(ctx: ContextT) -> ContextT:
        response = resolve(ctx.url)
        if response.status in UNHANDLED_STATUSES and not handle_errors:
            return ctx
        return ctx.send_raw(response).force_send()

    return middleware
