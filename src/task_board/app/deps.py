from task_board.services.task_store import TaskStore


def get_store() -> TaskStore:
    # Overwritten in main.py:
    # deps.get_store = lambda: store
    raise RuntimeError("TaskStore not wired")
