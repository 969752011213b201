from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Protocol, Union

from task_board.domain.errors import CorruptStateError, NotFoundError, PersistenceError
from task_board.domain.task_codec import dump_tasks, load_tasks
from task_board.domain.task_models import Priority, Task, new_task_id, parse_task_input

logger = logging.getLogger("task_board.store")

TASKS_KEY = "tasks"


class BlobStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class TaskStore:
    """
    Authoritative task collection backed by a single blob.

    Every mutator builds the next collection, writes it through the blob
    store, and swaps it in only after the write succeeded. Callers only ever
    see copies of the stored tasks.
    """

    def __init__(self, blobs: BlobStore, key: str = TASKS_KEY):
        self.blobs = blobs
        self.key = key
        self._tasks: List[Task] = []

    # --- lifecycle ---

    def restore(self) -> List[Task]:
        try:
            raw = self.blobs.get(self.key)
        except Exception as exc:
            logger.exception(
                "store.read_failed",
                extra={"category": "store", "event": "store.read_failed", "key": self.key},
            )
            raise PersistenceError(f"Could not read tasks: {exc}") from exc
        if raw is None:
            self._tasks = []
        else:
            try:
                self._tasks = load_tasks(raw)
            except CorruptStateError:
                self._tasks = []
                logger.warning(
                    "store.corrupt",
                    extra={"category": "store", "event": "store.corrupt", "key": self.key, "size": len(raw)},
                )
                raise
        logger.info(
            "store.restore",
            extra={"category": "store", "event": "store.restore", "key": self.key, "total": len(self._tasks)},
        )
        return self.load_all()

    def persist(self) -> str:
        return self._write(self._tasks)

    def _write(self, tasks: List[Task]) -> str:
        blob = dump_tasks(tasks)
        try:
            self.blobs.set(self.key, blob)
        except Exception as exc:
            logger.exception(
                "store.persist_failed",
                extra={"category": "store", "event": "store.persist_failed", "key": self.key},
            )
            raise PersistenceError(f"Could not save tasks: {exc}") from exc
        logger.debug(
            "store.persist",
            extra={"category": "store", "event": "store.persist", "key": self.key, "total": len(tasks)},
        )
        return blob

    def _commit(self, tasks: List[Task]) -> None:
        self._write(tasks)
        self._tasks = tasks

    # --- queries ---

    def load_all(self) -> List[Task]:
        return [t.model_copy() for t in self._tasks]

    def get_task(self, task_id: str) -> Task:
        return self._tasks[self._index(task_id)].model_copy()

    def _index(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        raise NotFoundError(task_id)

    # --- mutations ---

    def add_task(
        self,
        text: str,
        priority: Union[Priority, str, None],
        due_date: Union[date, str, None],
    ) -> Task:
        data = parse_task_input(text, priority, due_date)
        task = Task(
            id=new_task_id(),
            text=data.text,
            priority=data.priority,
            due_date=data.due_date,
            completed=False,
            created_at=datetime.now(timezone.utc),
        )
        self._commit([*self._tasks, task])
        logger.info(
            "task.create",
            extra={"category": "tasks", "event": "task.create", "task_id": task.id, "priority": task.priority.value},
        )
        return task.model_copy()

    def update_task(
        self,
        task_id: str,
        text: str,
        priority: Union[Priority, str, None],
        due_date: Union[date, str, None],
    ) -> Task:
        i = self._index(task_id)
        data = parse_task_input(text, priority, due_date)
        updated = self._tasks[i].model_copy(
            update={"text": data.text, "priority": data.priority, "due_date": data.due_date}
        )
        self._commit(self._replaced(i, updated))
        logger.info(
            "task.update",
            extra={"category": "tasks", "event": "task.update", "task_id": task_id},
        )
        return updated.model_copy()

    def toggle_completion(self, task_id: str) -> Task:
        i = self._index(task_id)
        current = self._tasks[i]
        updated = current.model_copy(update={"completed": not current.completed})
        self._commit(self._replaced(i, updated))
        logger.info(
            "task.toggle",
            extra={"category": "tasks", "event": "task.toggle", "task_id": task_id, "completed": updated.completed},
        )
        return updated.model_copy()

    def delete_task(self, task_id: str) -> None:
        i = self._index(task_id)
        self._commit(self._tasks[:i] + self._tasks[i + 1:])
        logger.info(
            "task.delete",
            extra={"category": "tasks", "event": "task.delete", "task_id": task_id},
        )

    def _replaced(self, i: int, task: Task) -> List[Task]:
        tasks = list(self._tasks)
        tasks[i] = task
        return tasks
