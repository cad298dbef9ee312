from __future__ import annotations

from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

API = "/api/v1/tasks"


async def _create_project(client: AsyncClient, key: str = "OPS") -> str:
    response = await client.post(
        "/api/v1/projects",
        json={"name": f"{key} project", "key": key, "type": "Software", "project_lead": "EMP001"},
    )
    assert response.status_code == 201
    return response.json()["project_id"]


async def _create_task(client: AsyncClient, **fields) -> dict:
    body = {"title": "Untitled"}
    body.update(fields)
    response = await client.post(API, json=body)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_task_assigns_keys_per_type(client: AsyncClient, employees):
    bug = await _create_task(client, title="Crash on login", type="Bug")
    first = await _create_task(client, title="Write docs")
    second = await _create_task(client, title="Review docs", type="Task")
    story = await _create_task(client, title="Profile page", type="Story")

    assert bug["task_key"] == "BUG-001"
    assert first["task_key"] == "TASK-001"
    assert second["task_key"] == "TASK-002"
    assert story["task_key"] == "STOR-001"
    assert first["status"] == "To Do"
    assert first["priority"] == "Medium"


async def test_create_task_with_references(client: AsyncClient, employees):
    project_id = await _create_project(client)
    task = await _create_task(
        client,
        title="Migrate cron jobs",
        project_id=project_id,
        assignee_id="EMP002",
        reporter_id="EMP001",
        due_date="2026-11-01",
        estimate="3d",
    )
    assert task["project_id"] == project_id
    assert task["assignee_id"] == "EMP002"
    assert task["due_date"] == "2026-11-01"


@pytest.mark.parametrize(
    ("field", "value"),
    [("assignee_id", "EMP999"), ("reporter_id", "NOPE"), ("project_id", str(uuid4()))],
)
async def test_create_task_rejects_unknown_references(client: AsyncClient, employees, field, value):
    response = await client.post(API, json={"title": "x", field: value})
    assert response.status_code == 400
    assert response.json()["detail"] == f"{field} is invalid"


async def test_create_task_rejects_unknown_priority(client: AsyncClient):
    response = await client.post(API, json={"title": "x", "priority": "Urgent"})
    assert response.status_code == 400


async def test_list_tasks_filters(client: AsyncClient, employees):
    project_id = await _create_project(client)
    await _create_task(client, title="Fix payslip rounding", type="Bug", project_id=project_id, assignee_id="EMP002")
    await _create_task(client, title="Export payslips", status="In Progress", assignee_id="EMP002")
    await _create_task(client, title="Onboarding checklist", priority="High", assignee_id="EMP003")

    by_type = (await client.get(API, params={"type": "Bug"})).json()
    assert [t["title"] for t in by_type["items"]] == ["Fix payslip rounding"]

    by_status = (await client.get(API, params={"status": "In Progress"})).json()
    assert [t["title"] for t in by_status["items"]] == ["Export payslips"]

    by_project = (await client.get(API, params={"project_id": project_id})).json()
    assert by_project["total"] == 1

    by_assignee = (await client.get(API, params={"assignee_id": "EMP002"})).json()
    assert by_assignee["total"] == 2

    searched = (await client.get(API, params={"q": "PAYSLIP"})).json()
    assert searched["total"] == 2

    by_key = (await client.get(API, params={"q": "bug-001"})).json()
    assert [t["task_key"] for t in by_key["items"]] == ["BUG-001"]


async def test_list_tasks_sorts_by_priority_rank(client: AsyncClient):
    await _create_task(client, title="a", priority="Low")
    await _create_task(client, title="b", priority="Critical")
    await _create_task(client, title="c", priority="Medium")
    await _create_task(client, title="d", priority="High")

    ascending = (await client.get(API, params={"sort_by": "priority"})).json()
    assert [t["priority"] for t in ascending["items"]] == ["Low", "Medium", "High", "Critical"]

    descending = (await client.get(API, params={"sort_by": "priority", "order": "desc"})).json()
    assert [t["priority"] for t in descending["items"]] == ["Critical", "High", "Medium", "Low"]


async def test_list_tasks_puts_missing_due_dates_last(client: AsyncClient):
    await _create_task(client, title="no date")
    await _create_task(client, title="later", due_date="2026-12-01")
    await _create_task(client, title="sooner", due_date="2026-11-01")

    ascending = (await client.get(API)).json()
    assert [t["title"] for t in ascending["items"]] == ["sooner", "later", "no date"]

    descending = (await client.get(API, params={"order": "desc"})).json()
    assert [t["title"] for t in descending["items"]] == ["later", "sooner", "no date"]


async def test_update_task(client: AsyncClient, employees):
    task = await _create_task(client, title="Draft policy", assignee_id="EMP002")
    response = await client.patch(
        f"{API}/{task['id']}",
        json={"status": "Done", "assignee_id": None, "title": None},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Done"
    assert data["assignee_id"] is None
    assert data["title"] == "Draft policy"
    assert data["task_key"] == task["task_key"]


async def test_update_task_rejects_unknown_assignee(client: AsyncClient, employees):
    task = await _create_task(client, title="Draft policy")
    response = await client.patch(f"{API}/{task['id']}", json={"assignee_id": "EMP999"})
    assert response.status_code == 400


async def test_task_comments(client: AsyncClient, employees):
    task = await _create_task(client, title="Plan offsite")
    first = await client.post(f"{API}/{task['id']}/comments", json={"text": "Venue booked", "author_id": "EMP001"})
    assert first.status_code == 201
    await client.post(f"{API}/{task['id']}/comments", json={"text": "Catering pending"})

    comments = (await client.get(f"{API}/{task['id']}/comments")).json()
    assert [c["text"] for c in comments] == ["Venue booked", "Catering pending"]
    assert comments[0]["author_id"] == "EMP001"
    assert comments[1]["author_id"] is None


async def test_task_comment_rejects_unknown_author(client: AsyncClient, employees):
    task = await _create_task(client, title="Plan offsite")
    response = await client.post(f"{API}/{task['id']}/comments", json={"text": "hi", "author_id": "EMP999"})
    assert response.status_code == 400
    assert response.json()["detail"] == "author_id is invalid"


async def test_delete_task(client: AsyncClient):
    task = await _create_task(client, title="Temporary")
    await client.post(f"{API}/{task['id']}/comments", json={"text": "soon gone"})

    response = await client.delete(f"{API}/{task['id']}")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert (await client.get(f"{API}/{task['id']}")).status_code == 404
    assert (await client.get(f"{API}/{task['id']}/comments")).status_code == 404


async def test_unknown_task_returns_404(client: AsyncClient):
    response = await client.get(f"{API}/{uuid4()}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Task not found"


async def test_search_escapes_like_wildcards(client: AsyncClient):
    await _create_task(client, title="Rename 100% field")
    await _create_task(client, title="Rename 1000 field")

    percent = (await client.get(API, params={"q": "100%"})).json()
    assert [t["title"] for t in percent["items"]] == ["Rename 100% field"]

    underscore = (await client.get(API, params={"q": "_"})).json()
    assert underscore["total"] == 0
