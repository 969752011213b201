import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from task_board.domain.errors import NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger("task_board.http")

_STATUS = {
    ValidationError: 422,
    NotFoundError: 404,
    PersistenceError: 503,
}


def install_error_handlers(app: FastAPI) -> None:
    for exc_type, status_code in _STATUS.items():
        app.add_exception_handler(exc_type, _make_handler(status_code))


def _make_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.info(
            "request.rejected",
            extra={
                "category": "http",
                "event": "request.rejected",
                "request_id": getattr(request.state, "request_id", None),
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "error": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler
