from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from dataclasses import replace
from http import HTTPStatus
from typing import Callable, Optional

import websockets
from websockets.asyncio.server import ServerConnection
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from serve_static import StaticFileResolver, StaticResponse, adapt
from serve_static.resolver import PLAIN_TEXT

from .config import StaticServerConfig
from .context import RequestContext

Route = Callable[[RequestContext], RequestContext]


class StaticServer:
    """Threaded asyncio HTTP server for a static file directory."""

    def __init__(
        self,
        config: StaticServerConfig,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._logger = logger or logging.getLogger("static_server")
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_async: Optional[asyncio.Event] = None
        self._started = threading.Event()
        self._startup_error: Optional[Exception] = None
        self._routes = self._build_routes()

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def is_running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self._startup_error is None
        )

    def start(self, timeout_seconds: float = 5.0) -> None:
        if self.is_running:
            self._logger.warning("Static server is already running")
            return

        self._startup_error = None
        self._started.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            daemon=True,
            name="static-server",
        )
        self._thread.start()

        if not self._started.wait(timeout_seconds):
            raise RuntimeError(
                f"Static server did not start within {timeout_seconds:.1f}s"
            )

        if self._startup_error is not None:
            raise RuntimeError(f"Static server startup failed: {self._startup_error}")

    def stop(self, timeout_seconds: float = 5.0) -> None:
        if self._thread is None:
            return

        if self._loop and self._stop_async:
            self._loop.call_soon_threadsafe(self._stop_async.set)

        self._thread.join(timeout=timeout_seconds)
        if self._thread.is_alive():
            self._logger.error(
                "Static server thread did not stop within %.1fs",
                timeout_seconds,
            )

        self._thread = None
        self._loop = None
        self._stop_async = None

    def dispatch(self, target: str) -> StaticResponse:
        """Run ``target`` through the route chain and return the answer."""
        ctx = RequestContext(target)
        for route in self._routes:
            ctx = route(ctx)
            if ctx.sent:
                break

        if not ctx.sent or ctx.response is None:
            return StaticResponse(
                status=404,
                headers={"Content-Type": PLAIN_TEXT},
                body=b"404 Not Found",
            )
        return ctx.response

    def _build_routes(self) -> list[Route]:
        routes: list[Route] = []
        if self._config.healthz:
            routes.append(self._healthz_route)
        routes.append(self._static_route())
        return routes

    def _healthz_route(self, ctx: RequestContext) -> RequestContext:
        if ctx.path != self._config.healthz_path:
            return ctx
        return ctx.send_text(200, "ok\n").force_send()

    def _static_route(self) -> Route:
        options = self._config.static
        prefix = self._config.mount_prefix
        resolver = StaticFileResolver(self._config.root, options, logger=self._logger)

        resolve = resolver.resolve
        if prefix and options.strip_from_pathname == prefix:
            resolve = _prefix_redirects(resolver.resolve, prefix)
        middleware = adapt(resolve, options.handle_errors)

        def route(ctx: RequestContext) -> RequestContext:
            path = ctx.path
            if prefix and path != prefix and not path.startswith(f"{prefix}/"):
                return ctx
            return middleware(ctx)

        return route

    def _run_loop(self) -> None:
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        self._stop_async = asyncio.Event()

        try:
            self._loop.run_until_complete(self._serve())
        except Exception as error:  # pragma: no cover - exercised manually
            self._startup_error = error
            self._logger.error("Static server failed: %s", error, exc_info=True)
            self._started.set()
        finally:
            if self._loop is not None:
                pending = asyncio.all_tasks(self._loop)
                for task in pending:
                    task.cancel()
                with contextlib.suppress(Exception):
                    self._loop.run_until_complete(
                        asyncio.gather(*pending, return_exceptions=True)
                    )
                self._loop.close()

    async def _serve(self) -> None:
        async with websockets.serve(
            self._handler,
            host=self._config.host,
            port=self._config.port,
            process_request=self._process_request,
            logger=self._logger,
        ):
            self._logger.info(
                "Serving %s at http://%s:%d%s",
                self._config.root,
                self._config.host,
                self._config.port,
                self._config.mount_path,
            )
            self._started.set()
            await self._stop_async.wait()

    async def _handler(self, websocket: ServerConnection) -> None:
        await websocket.close(code=1008, reason="No websocket endpoint")

    async def _process_request(
        self,
        connection: Optional[ServerConnection],
        request: Request,
    ) -> Response:
        del connection  # Every request is answered over plain HTTP.
        try:
            response = await asyncio.to_thread(self.dispatch, request.path)
        except Exception as error:
            self._logger.error("Failed to serve %s: %s", request.path, error, exc_info=True)
            response = StaticResponse(
                status=500,
                headers={"Content-Type": PLAIN_TEXT},
                body=b"500 Internal Server Error",
            )

        self._logger.debug("GET %s -> %d", request.path, response.status)
        return self._response(response)

    @staticmethod
    def _response(response: StaticResponse) -> Response:
        body = response.body or b""
        headers = Headers()
        for name, value in response.headers.items():
            headers[name] = value
        headers["Content-Length"] = str(len(body))
        return Response(response.status, HTTPStatus(response.status).phrase, headers, body)


def _prefix_redirects(
    resolve: Callable[[str], StaticResponse],
    prefix: str,
) -> Callable[[str], StaticResponse]:
    """Re-add a stripped mount prefix to redirect targets."""

    def resolve_mounted(url: str) -> StaticResponse:
        response = resolve(url)
        if response.status != 308:
            return response
        headers = dict(response.headers)
        headers["Location"] = f"{prefix}{headers['Location']}"
        return replace(response, headers=headers)

    return resolve_mounted
