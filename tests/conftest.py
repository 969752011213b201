# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_board.app.main import create_app
from task_board.services.task_store import TaskStore

from .fakes import FailingBlobStore


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep create_app() from writing ./logs or ./data during tests."""
    monkeypatch.setenv("LOG_TO_FILE", "0")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("DB_PATH", str(tmp_path / "tasks.db"))


@pytest.fixture()
def blobs() -> FailingBlobStore:
    return FailingBlobStore()


@pytest.fixture()
def store(blobs: FailingBlobStore) -> TaskStore:
    s = TaskStore(blobs)
    s.restore()
    return s


@pytest.fixture()
def client(blobs: FailingBlobStore) -> Iterator[TestClient]:
    app = create_app(blob_store=blobs)
    with TestClient(app) as c:
        yield c
