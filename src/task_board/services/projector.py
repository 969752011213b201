"""Read-only views derived from a snapshot of the task collection.

Nothing here mutates its input or caches results; the shell recomputes every
view after each change.
"""
from __future__ import annotations

from typing import Dict, Iterable, List

from task_board.domain.task_models import Priority, Task
from task_board.domain.view_models import BoardView, DateGroup, TaskStats


def sorted_view(tasks: Iterable[Task]) -> List[Task]:
    """Incomplete first, then priority A..D, then earliest due date.

    `sorted` is stable, so ties keep their input order.
    """
    return sorted(tasks, key=lambda t: (t.completed, t.priority.rank, t.due_date))


def priority_groups(tasks: Iterable[Task]) -> Dict[Priority, List[Task]]:
    groups: Dict[Priority, List[Task]] = {p: [] for p in Priority}
    for t in tasks:
        if not t.completed:
            groups[t.priority].append(t)
    return groups


def due_date_groups(tasks: Iterable[Task]) -> List[DateGroup]:
    by_date: Dict = {}
    for t in tasks:
        if not t.completed:
            by_date.setdefault(t.due_date, []).append(t)
    return [DateGroup(date=d, tasks=by_date[d]) for d in sorted(by_date)]


def stats(tasks: Iterable[Task]) -> TaskStats:
    tasks = list(tasks)
    return TaskStats(total=len(tasks), completed=sum(1 for t in tasks if t.completed))


def build_board(tasks: Iterable[Task]) -> BoardView:
    tasks = list(tasks)
    return BoardView(
        tasks=sorted_view(tasks),
        priority_groups=priority_groups(tasks),
        due_date_groups=due_date_groups(tasks),
        stats=stats(tasks),
    )
