from __future__ import annotations


class TaskBoardError(Exception):
    """Base class for every error the task store hands back to the shell."""


class ValidationError(TaskBoardError):
    """Bad or missing input field. The message is shown to the user as-is."""


class NotFoundError(TaskBoardError):
    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class CorruptStateError(TaskBoardError):
    """The persisted blob could not be decoded."""


class PersistenceError(TaskBoardError):
    """Writing the blob failed. In-memory state was left untouched."""
