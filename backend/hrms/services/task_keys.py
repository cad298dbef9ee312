"""Human-readable task keys: ``BUG-001``, ``STOR-014``, ``TASK-102``."""

from __future__ import annotations

from collections.abc import Iterable

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.models.work import Task

TASK_KEY_PREFIXES = {"Bug": "BUG", "Story": "STOR"}
DEFAULT_TASK_KEY_PREFIX = "TASK"


def task_key_prefix(task_type: str) -> str:
    return TASK_KEY_PREFIXES.get(task_type, DEFAULT_TASK_KEY_PREFIX)


def next_task_key(prefix: str, existing_keys: Iterable[str]) -> str:
    highest = 0
    for key in existing_keys:
        head, _, number = key.partition("-")
        if head != prefix or not number.isdigit():
            continue
        highest = max(highest, int(number))
    return f"{prefix}-{highest + 1:03d}"


async def generate_task_key(session: AsyncSession, task_type: str) -> str:
    prefix = task_key_prefix(task_type)
    keys = await session.exec(select(Task.task_key).where(col(Task.task_key).startswith(f"{prefix}-")))
    return next_task_key(prefix, keys)
