# ruff: noqa

import pytest

from hrms.models.work import Task
from hrms.services.task_keys import generate_task_key, next_task_key, task_key_prefix


def test_task_key_prefix_by_type():
    assert task_key_prefix("Bug") == "BUG"
    assert task_key_prefix("Story") == "STOR"
    assert task_key_prefix("Task") == "TASK"
    assert task_key_prefix("Epic") == "TASK"


def test_next_task_key_starts_at_one():
    assert next_task_key("BUG", []) == "BUG-001"


def test_next_task_key_uses_highest_number_for_prefix():
    keys = ["TASK-101", "BUG-102", "TASK-007", "STOR-103"]
    assert next_task_key("TASK", keys) == "TASK-102"
    assert next_task_key("BUG", keys) == "BUG-103"


def test_next_task_key_skips_malformed_keys():
    assert next_task_key("TASK", ["TASK-", "TASK-abc", "TASKS-009"]) == "TASK-001"


def test_next_task_key_does_not_truncate_large_numbers():
    assert next_task_key("BUG", ["BUG-999"]) == "BUG-1000"


@pytest.mark.asyncio
async def test_generate_task_key_reads_existing_rows(session):
    session.add_all(
        [
            Task(task_key="STOR-004", title="Profile themes", type="Story"),
            Task(task_key="TASK-010", title="Login", type="Task"),
        ]
    )
    await session.commit()

    assert await generate_task_key(session, "Story") == "STOR-005"
    assert await generate_task_key(session, "Task") == "TASK-011"
    assert await generate_task_key(session, "Bug") == "BUG-001"
