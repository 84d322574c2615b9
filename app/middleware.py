import logging
import time
import traceback
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.config import settings
from app.exceptions import NotFoundError
from app.schemas import ProblemDetails

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("app.requests")

# ---------------------------------------------------------------------------
# Per-request context variable
# ---------------------------------------------------------------------------

query_count_var: ContextVar[int] = ContextVar("query_count", default=0)


def install_query_counter(engine) -> None:
    """
    Register a ``before_cursor_execute`` event listener on *engine* that
    increments the per-request ``query_count_var`` for every SQL statement.

    Must be called once per engine (production engine in ``database.py``,
    test engine in ``conftest.py``).
    """
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


# ---------------------------------------------------------------------------
# Middleware (pure ASGI — avoids BaseHTTPMiddleware ContextVar isolation)
# ---------------------------------------------------------------------------

class TimingMiddleware:
    """
    Pure ASGI middleware that logs one line per HTTP request and adds two
    diagnostic response headers:

    - ``X-Response-Time-Ms``: wall-clock time for the entire request.
    - ``X-Query-Count``: total SQL queries executed during the request,
      counted via the SQLAlchemy engine event registered by
      ``install_query_counter``.

    The log level follows the outcome: ERROR for 5xx responses, WARNING
    for requests slower than ``settings.SLOW_REQUEST_MS``, INFO otherwise.
    """

    def __init__(self, app: ASGIApp, slow_request_ms: int | None = None) -> None:
        self.app = app
        self.slow_request_ms = (
            slow_request_ms if slow_request_ms is not None else settings.SLOW_REQUEST_MS
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Reset the per-request counter.
        query_count_var.set(0)
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                headers.append((b"x-query-count", str(query_count_var.get()).encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_logger.log(
                self._level_for(status_code, elapsed_ms),
                "HTTP %s %s responded %d in %.4f ms",
                scope["method"],
                scope["path"],
                status_code,
                elapsed_ms,
            )

    def _level_for(self, status_code: int, elapsed_ms: float) -> int:
        if status_code >= 500:
            return logging.ERROR
        if elapsed_ms > self.slow_request_ms:
            return logging.WARNING
        return logging.INFO


class ProblemDetailsMiddleware:
    """
    Last-resort exception translator.

    Any exception escaping the routers is converted into exactly one
    ``application/problem+json`` response and never re-raised:

    - ``NotFoundError`` becomes a 404 whose detail is the error message.
    - Everything else becomes a 500 whose detail is the full traceback in
      development and a generic sentence otherwise.
    """

    GENERIC_TITLE = "An unexpected error occurred."
    GENERIC_DETAIL = "The server encountered an error. Please try again or contact support."
    NOT_FOUND_TITLE = "Resource Not Found"

    def __init__(self, app: ASGIApp, development: bool | None = None) -> None:
        self.app = app
        self.development = development

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            path = scope.get("path", "")
            if response_started:
                logger.error("Exception raised after response started. Path: %s", path, exc_info=exc)
                return
            problem = self.build_problem(exc, path)
            await self._send_problem(send, problem)

    def build_problem(self, exc: Exception, path: str) -> ProblemDetails:
        if isinstance(exc, NotFoundError):
            logger.warning("Resource not found. Path: %s: %s", path, exc)
            return ProblemDetails(
                title=self.NOT_FOUND_TITLE, status=404, detail=str(exc), instance=path
            )

        logger.error("Unhandled exception caught globally. Path: %s", path, exc_info=exc)
        development = settings.is_development if self.development is None else self.development
        if development:
            detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        else:
            detail = self.GENERIC_DETAIL
        return ProblemDetails(title=self.GENERIC_TITLE, status=500, detail=detail, instance=path)

    @staticmethod
    async def _send_problem(send: Send, problem: ProblemDetails) -> None:
        body = problem.model_dump_json().encode()
        await send({
            "type": "http.response.start",
            "status": problem.status,
            "headers": [
                (b"content-type", b"application/problem+json"),
                (b"content-length", str(len(body)).encode()),
            ],
        })
        await send({"type": "http.response.body", "body": body})
