from __future__ import annotations
import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from enum import Enum
from datetime import date, datetime
import uuid

from task_board.domain.errors import ValidationError


class Priority(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @property
    def rank(self) -> int:
        return list(Priority).index(self)


class TaskInput(BaseModel):
    """Fields a user supplies when adding or editing a task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str = Field(min_length=1)
    priority: Priority
    due_date: date

    @field_validator("text", mode="before")
    @classmethod
    def _strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("due_date", mode="before")
    @classmethod
    def _iso_date_only(cls, v):
        # pydantic's lax mode would read "0" or 0 as a unix timestamp
        if isinstance(v, str):
            return date.fromisoformat(v.strip())
        if isinstance(v, datetime):
            return v.date()
        if not isinstance(v, date):
            raise ValueError("due date must be a calendar date")
        return v


class Task(TaskInput):
    id: str
    completed: bool = False
    created_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _legacy_numeric_id(cls, v):
        # the browser version keyed tasks by Date.now()
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


def new_task_id() -> str:
    return str(uuid.uuid4())


_FIELD_MESSAGES = {
    "text": "Please enter a task description!",
    "priority": "Priority must be one of A, B, C, D",
    "due_date": "Due date must be a valid date (YYYY-MM-DD)",
    "dueDate": "Due date must be a valid date (YYYY-MM-DD)",
}


def parse_task_input(text, priority, due_date) -> TaskInput:
    """Presence checks first, then pydantic coercion.

    Raises the domain ValidationError carrying a user-facing message.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValidationError(_FIELD_MESSAGES["text"])
    if due_date is None or (isinstance(due_date, str) and not due_date.strip()):
        raise ValidationError("Please select a due date!")
    if priority is None or (isinstance(priority, str) and not priority.strip()):
        raise ValidationError("Please select a priority!")

    try:
        return TaskInput(text=text, priority=priority, due_date=due_date)
    except pydantic.ValidationError as exc:
        loc = exc.errors()[0]["loc"]
        field = str(loc[0]) if loc else ""
        raise ValidationError(_FIELD_MESSAGES.get(field, "Invalid task input")) from exc
