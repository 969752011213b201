from typing import Optional

from fastapi import APIRouter, Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from task_board.app import deps
from task_board.domain.task_models import Task
from task_board.domain.view_models import BoardView
from task_board.services import projector

router = APIRouter(prefix="/api", tags=["tasks"])


class TaskPayload(BaseModel):
    # Everything optional here; presence is checked by the store so the
    # client gets the same messages as the HTML form.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None


@router.get("/tasks", response_model=list[Task])
def list_tasks():
    return deps.get_store().load_all()


@router.post("/tasks", response_model=Task, status_code=201)
def create_task(payload: TaskPayload):
    return deps.get_store().add_task(payload.text, payload.priority, payload.due_date)


@router.get("/tasks/{task_id}", response_model=Task)
def get_task(task_id: str):
    return deps.get_store().get_task(task_id)


@router.put("/tasks/{task_id}", response_model=Task)
def update_task(task_id: str, payload: TaskPayload):
    return deps.get_store().update_task(task_id, payload.text, payload.priority, payload.due_date)


@router.post("/tasks/{task_id}/toggle", response_model=Task)
def toggle_task(task_id: str):
    return deps.get_store().toggle_completion(task_id)


@router.delete("/tasks/{task_id}", status_code=204)
def delete_task(task_id: str):
    deps.get_store().delete_task(task_id)
    return Response(status_code=204)


@router.get("/board", response_model=BoardView)
def board():
    return projector.build_board(deps.get_store().load_all())
