from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.templating import Jinja2Templates

from task_board.app import deps
from task_board.app.formatting import count_label, format_date
from task_board.domain.errors import NotFoundError, PersistenceError, TaskBoardError, ValidationError
from task_board.domain.task_models import Priority
from task_board.services import projector

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["format_date"] = format_date
templates.env.filters["count_label"] = count_label

router = APIRouter(tags=["pages"])


def _render(request: Request, *, editing=None, form=None, error: Optional[str] = None, status_code: int = 200):
    board = projector.build_board(deps.get_store().load_all())
    if form is None:
        form = {
            "text": editing.text if editing else "",
            "priority": editing.priority.value if editing else Priority.A.value,
            "due_date": editing.due_date.isoformat() if editing else date.today().isoformat(),
        }
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "board": board,
            "priorities": list(Priority),
            "editing": editing,
            "form": form,
            "error": error,
        },
        status_code=status_code,
    )


def _back_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


def _failed(request: Request, exc: TaskBoardError, **kwargs):
    status_code = 404 if isinstance(exc, NotFoundError) else 503
    return _render(request, error=str(exc), status_code=status_code, **kwargs)


@router.get("/", response_class=HTMLResponse)
def home(request: Request, edit: Optional[str] = None):
    try:
        editing = deps.get_store().get_task(edit) if edit else None
    except NotFoundError as exc:
        return _failed(request, exc)
    return _render(request, editing=editing)


@router.post("/tasks")
def add_task(
    request: Request,
    text: str = Form(""),
    priority: str = Form(""),
    due_date: str = Form(""),
):
    form = {"text": text, "priority": priority, "due_date": due_date}
    try:
        deps.get_store().add_task(text, priority, due_date)
    except ValidationError as exc:
        return _render(request, form=form, error=str(exc), status_code=400)
    except PersistenceError as exc:
        return _failed(request, exc, form=form)
    return _back_home()


@router.post("/tasks/{task_id}/edit")
def edit_task(
    request: Request,
    task_id: str,
    text: str = Form(""),
    priority: str = Form(""),
    due_date: str = Form(""),
):
    store = deps.get_store()
    form = {"text": text, "priority": priority, "due_date": due_date}
    try:
        store.update_task(task_id, text, priority, due_date)
    except ValidationError as exc:
        return _render(request, editing=store.get_task(task_id), form=form, error=str(exc), status_code=400)
    except NotFoundError as exc:
        return _failed(request, exc)
    except PersistenceError as exc:
        return _failed(request, exc, editing=store.get_task(task_id), form=form)
    return _back_home()


@router.post("/tasks/{task_id}/toggle")
def toggle_task(request: Request, task_id: str):
    try:
        deps.get_store().toggle_completion(task_id)
    except (NotFoundError, PersistenceError) as exc:
        return _failed(request, exc)
    return _back_home()


@router.post("/tasks/{task_id}/delete")
def delete_task(request: Request, task_id: str):
    try:
        deps.get_store().delete_task(task_id)
    except (NotFoundError, PersistenceError) as exc:
        return _failed(request, exc)
    return _back_home()
