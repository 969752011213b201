"""Blob format for the persisted task collection.

The whole collection is one JSON array of objects with the fields
``id, text, priority, dueDate, completed, createdAt``. There is no version
marker; any change to that shape needs a migration step here.
"""
from __future__ import annotations

from collections import Counter
from typing import Iterable, List

import pydantic
from pydantic import TypeAdapter

from task_board.domain.errors import CorruptStateError
from task_board.domain.task_models import Task

_TASK_LIST = TypeAdapter(List[Task])


def dump_tasks(tasks: Iterable[Task]) -> str:
    return _TASK_LIST.dump_json(list(tasks), by_alias=True).decode("utf-8")


def load_tasks(blob: str) -> List[Task]:
    try:
        tasks = _TASK_LIST.validate_json(blob)
    except pydantic.ValidationError as exc:
        raise CorruptStateError(f"Stored tasks could not be decoded: {exc.error_count()} error(s)") from exc

    dupes = sorted(tid for tid, n in Counter(t.id for t in tasks).items() if n > 1)
    if dupes:
        raise CorruptStateError(f"Stored tasks repeat ids: {', '.join(dupes)}")
    return tasks
