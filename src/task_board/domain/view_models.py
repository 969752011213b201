from __future__ import annotations
import datetime as dt
from typing import Dict, List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from task_board.domain.task_models import Priority, Task


class _View(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DateGroup(_View):
    date: dt.date
    tasks: List[Task]


class TaskStats(_View):
    total: int
    completed: int


class BoardView(_View):
    tasks: List[Task]
    priority_groups: Dict[Priority, List[Task]]
    due_date_groups: List[DateGroup]
    stats: TaskStats
