"""Task status tallies for project cards and personal task dashboards."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.models.work import Task
from hrms.schemas.work import TaskStatusCounts

_STATUS_FIELDS = {"To Do": "to_do", "In Progress": "in_progress", "Done": "done"}


def _tally(rows: Sequence[tuple[str, int]]) -> TaskStatusCounts:
    counts = TaskStatusCounts()
    for task_status, count in rows:
        field = _STATUS_FIELDS.get(task_status)
        if field is not None:
            setattr(counts, field, getattr(counts, field) + count)
        counts.total += count
    return counts


async def status_counts(session: AsyncSession, *conditions: Any) -> TaskStatusCounts:
    statement = select(col(Task.status), func.count()).where(*conditions).group_by(col(Task.status))
    return _tally(list(await session.exec(statement)))


async def status_counts_by_project(
    session: AsyncSession,
    project_ids: Sequence[UUID],
) -> dict[UUID, TaskStatusCounts]:
    """One grouped query for every project in ``project_ids``."""
    if not project_ids:
        return {}
    statement = (
        select(col(Task.project_id), col(Task.status), func.count())
        .where(col(Task.project_id).in_(project_ids))
        .group_by(col(Task.project_id), col(Task.status))
    )
    rows_by_project: dict[UUID, list[tuple[str, int]]] = {}
    for project_id, task_status, count in await session.exec(statement):
        rows_by_project.setdefault(project_id, []).append((task_status, count))
    return {project_id: _tally(rows) for project_id, rows in rows_by_project.items()}
