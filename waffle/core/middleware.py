from __future__ import annotations

import re
import time
from uuid import uuid4

import structlog
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send


PUZZLE_PATH = re.compile(r"^/puzzles/(\d+)(?:/|$)")


def _puzzle_id_from_path(path: str) -> int | None:
    match = PUZZLE_PATH.match(path)
    return int(match.group(1)) if match else None


class RequestContextMiddleware:
    """Binds request_id (and puzzle_id on puzzle routes) to the log context.

    The id is echoed as ``X-Request-ID``; one ``http_request`` event per request
    carries the status and duration.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app
        self.logger = structlog.get_logger("waffle.access")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get("x-request-id") or str(uuid4())

        scope_state = scope.setdefault("state", {})
        if isinstance(scope_state, dict):
            scope_state["request_id"] = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        puzzle_id = _puzzle_id_from_path(scope.get("path", ""))
        if puzzle_id is not None:
            structlog.contextvars.bind_contextvars(puzzle_id=puzzle_id)

        started_at = time.perf_counter()
        status_code = 500

        async def send_with_request_id(message: Message) -> None:
            nonlocal status_code

            if message["type"] == "http.response.start":
                status_code = int(message["status"])
                MutableHeaders(scope=message)["X-Request-ID"] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            self.logger.info(
                "http_request",
                method=scope.get("method"),
                path=scope.get("path"),
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started_at) * 1000, 2),
            )
            structlog.contextvars.clear_contextvars()
