from pathlib import Path
from typing import Optional
import os
import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from task_board.app import deps
from task_board.app.errors import install_error_handlers
from task_board.app.middleware.access_log import AccessLogMiddleware
from task_board.app.routes import pages, tasks
from task_board.domain.errors import CorruptStateError, PersistenceError
from task_board.infra.db.blob_store_sqlite import SQLiteBlobStore, create_schema
from task_board.infra.db.sqlite import make_sqlite_url, make_engine, make_sessionmaker
from task_board.observability.logging import setup_logging
from task_board.services.task_store import BlobStore, TaskStore

BASE_DIR = Path(__file__).resolve().parent
logger = logging.getLogger("task_board.system")


def _sqlite_blob_store(db_path: str) -> SQLiteBlobStore:
    engine = make_engine(make_sqlite_url(db_path))
    create_schema(engine)
    logger.info(
        "db.ready",
        extra={"category": "system", "event": "db.ready", "db_path": db_path},
    )
    return SQLiteBlobStore(make_sessionmaker(engine))


def create_app(db_path: Optional[str] = None, blob_store: Optional[BlobStore] = None) -> FastAPI:
    setup_logging()
    logger.info("system.start", extra={"category": "system", "event": "system.start"})

    app = FastAPI(title="Task Board")
    app.add_middleware(AccessLogMiddleware)
    install_error_handlers(app)

    # Static files (CSS)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    # --- store wiring ---
    if blob_store is None:
        blob_store = _sqlite_blob_store(db_path or os.getenv("DB_PATH", "./data/tasks.db"))

    store = TaskStore(blob_store)
    try:
        store.restore()
    except CorruptStateError:
        # restore() already reset to empty; the next write replaces the bad blob
        logger.warning(
            "store.reset",
            extra={"category": "system", "event": "store.reset"},
        )
    except PersistenceError:
        # starting empty would let the next write clobber tasks that may still be on disk
        logger.error(
            "system.abort",
            extra={"category": "system", "event": "system.abort", "reason": "store unreadable"},
        )
        raise
    deps.get_store = lambda: store
    app.state.store = store

    # Routers
    app.include_router(tasks.router)
    app.include_router(pages.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def run() -> None:
    import uvicorn

    uvicorn.run(
        "task_board.app.main:create_app",
        factory=True,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,
    )
