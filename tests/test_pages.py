# tests/test_pages.py

from __future__ import annotations

from datetime import date

from fastapi.testclient import TestClient

from task_board.services.task_store import TaskStore

from .fakes import FailingBlobStore


def _store(client: TestClient) -> TaskStore:
    return client.app.state.store


def test_empty_board(client: TestClient) -> None:
    resp = client.get("/")

    assert resp.status_code == 200
    html = resp.text
    assert "No tasks yet" in html
    assert "No upcoming tasks" in html
    assert html.count('class="priority-task-item empty"') == 4
    assert "0 tasks" in html
    assert "0 completed" in html
    assert "Add New Task" in html
    assert f'value="{date.today().isoformat()}"' in html
    assert 'value="A" checked' in " ".join(html.split())


def test_add_task_via_form_redirects(client: TestClient) -> None:
    resp = client.post(
        "/tasks",
        data={"text": "Buy milk", "priority": "B", "due_date": "2024-06-01"},
        follow_redirects=False,
    )

    assert resp.status_code == 303
    assert resp.headers["location"] == "/"

    html = client.get("/").text
    assert "Buy milk" in html
    assert "Jun 1, 2024" in html
    assert "1 task" in html
    assert "No tasks yet" not in html


def test_form_validation_rerenders_with_message(client: TestClient) -> None:
    resp = client.post("/tasks", data={"text": "   ", "priority": "A", "due_date": "2024-06-01"})

    assert resp.status_code == 400
    assert "Please enter a task description!" in resp.text
    assert _store(client).load_all() == []


def test_form_missing_priority(client: TestClient) -> None:
    resp = client.post("/tasks", data={"text": "Buy milk", "due_date": "2024-06-01"})

    assert resp.status_code == 400
    assert "Please select a priority!" in resp.text
    assert 'value="Buy milk"' in resp.text


def test_edit_page_prefills_form(client: TestClient) -> None:
    task = _store(client).add_task("Buy milk", "C", "2024-06-01")

    html = client.get(f"/?edit={task.id}").text

    assert "Edit Task" in html
    assert "Update Task" in html
    assert f'action="/tasks/{task.id}/edit"' in html
    assert 'value="Buy milk"' in html
    assert 'value="2024-06-01"' in html


def test_edit_unknown_task_is_404(client: TestClient) -> None:
    assert client.get("/?edit=nope").status_code == 404


def test_edit_toggle_delete_via_forms(client: TestClient) -> None:
    store = _store(client)
    task = store.add_task("Buy milk", "B", "2024-06-01")

    resp = client.post(
        f"/tasks/{task.id}/edit",
        data={"text": "Buy oat milk", "priority": "A", "due_date": "2024-06-02"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert store.get_task(task.id).text == "Buy oat milk"

    client.post(f"/tasks/{task.id}/toggle")
    assert store.get_task(task.id).completed is True
    html = client.get("/").text
    assert "1 completed" in html
    assert "No upcoming tasks" in html

    client.post(f"/tasks/{task.id}/delete")
    assert store.load_all() == []


def test_edit_validation_keeps_edit_mode(client: TestClient) -> None:
    task = _store(client).add_task("Buy milk", "B", "2024-06-01")

    resp = client.post(f"/tasks/{task.id}/edit", data={"text": "Buy milk", "priority": "B", "due_date": ""})

    assert resp.status_code == 400
    assert "Please select a due date!" in resp.text
    assert "Update Task" in resp.text
    assert _store(client).get_task(task.id).due_date == date(2024, 6, 1)


def test_task_text_is_escaped(client: TestClient) -> None:
    _store(client).add_task("<script>alert(1)</script>", "A", "2024-06-01")

    html = client.get("/").text

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html


def test_views_render_in_projection_order(client: TestClient) -> None:
    store = _store(client)
    store.add_task("Buy milk", "B", "2024-06-01")
    store.add_task("Pay rent", "A", "2024-06-01")
    store.add_task("Book flights", "D", "2024-05-20")

    html = client.get("/").text
    tasks_section = html[html.index('id="tasks-container"'):html.index('id="due-dates-panel"')]
    dates_section = html[html.index('id="due-dates-list"'):]

    assert tasks_section.index("Pay rent") < tasks_section.index("Buy milk") < tasks_section.index("Book flights")
    assert dates_section.index("May 20, 2024") < dates_section.index("Jun 1, 2024")


def test_unknown_task_renders_page_with_message(client: TestClient) -> None:
    resp = client.get("/?edit=nope")
    assert resp.status_code == 404
    assert resp.headers["content-type"].startswith("text/html")
    assert "Task not found: nope" in resp.text
    assert "Add New Task" in resp.text

    resp = client.post("/tasks/nope/toggle")
    assert resp.status_code == 404
    assert "Task not found: nope" in resp.text

    resp = client.post("/tasks/nope/edit", data={"text": "x", "priority": "A", "due_date": "2024-06-01"})
    assert resp.status_code == 404
    assert "Task not found: nope" in resp.text


def test_failed_save_renders_page_and_keeps_task(client: TestClient, blobs: FailingBlobStore) -> None:
    task = _store(client).add_task("Buy milk", "B", "2024-06-01")
    blobs.fail_writes = True

    resp = client.post(f"/tasks/{task.id}/delete")
    assert resp.status_code == 503
    assert resp.headers["content-type"].startswith("text/html")
    assert "Could not save tasks" in resp.text
    assert "Buy milk" in resp.text

    resp = client.post("/tasks", data={"text": "Pay rent", "priority": "A", "due_date": "2024-06-01"})
    assert resp.status_code == 503
    assert 'value="Pay rent"' in resp.text
    assert [t.id for t in _store(client).load_all()] == [task.id]
