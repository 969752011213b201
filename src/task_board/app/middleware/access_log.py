import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("task_board.http")

# static assets would drown out the task traffic
_QUIET_PREFIXES = ("/static/",)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One `request.end` line per request, or `request.error` if a handler blew up."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()
        fields = {
            "category": "http",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={**fields, "event": "request.error", "duration_ms": _elapsed_ms(start)},
            )
            raise

        response.headers["X-Request-ID"] = request_id
        if not request.url.path.startswith(_QUIET_PREFIXES):
            logger.info(
                "request.end",
                extra={
                    **fields,
                    "event": "request.end",
                    "status_code": response.status_code,
                    "duration_ms": _elapsed_ms(start),
                },
            )
        return response


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
