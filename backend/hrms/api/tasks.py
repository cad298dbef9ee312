"""Task tracking endpoints."""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.api.deps import get_task_or_404
from hrms.core.logging import get_logger
from hrms.core.time import utcnow
from hrms.db import crud
from hrms.db.pagination import paginate
from hrms.db.session import get_session
from hrms.models.org import Employee
from hrms.models.projects import Project
from hrms.models.work import TASK_PRIORITIES, TASK_STATUSES, Task, TaskComment
from hrms.schemas.common import OkResponse
from hrms.schemas.pagination import DefaultLimitOffsetPage
from hrms.schemas.work import (
    TaskCommentCreate,
    TaskCommentRead,
    TaskCreate,
    TaskPriority,
    TaskRead,
    TaskSortField,
    TaskStatus,
    TaskType,
    TaskUpdate,
)
from hrms.services.task_keys import generate_task_key

router = APIRouter(prefix="/tasks", tags=["tasks"])
logger = get_logger(__name__)


def _rank(column, ordered_values: tuple[str, ...]):  # noqa: ANN001, ANN202
    return case(
        {value: index for index, value in enumerate(ordered_values)},
        value=column,
        else_=len(ordered_values),
    )


_SORT_COLUMNS = {
    "due_date": col(Task.due_date),
    "created_at": col(Task.created_at),
    "updated_at": col(Task.updated_at),
    "title": func.lower(col(Task.title)),
    "status": _rank(col(Task.status), TASK_STATUSES),
    "priority": _rank(col(Task.priority), TASK_PRIORITIES),
    "task_key": col(Task.task_key),
}


async def _require_references(
    session: AsyncSession,
    *,
    project_id: UUID | None = None,
    assignee_id: str | None = None,
    reporter_id: str | None = None,
) -> None:
    if project_id is not None and await session.get(Project, project_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="project_id is invalid")
    if assignee_id is not None and await session.get(Employee, assignee_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="assignee_id is invalid")
    if reporter_id is not None and await session.get(Employee, reporter_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="reporter_id is invalid")


@router.get("", response_model=DefaultLimitOffsetPage[TaskRead])
async def list_tasks(
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    type_filter: TaskType | None = Query(default=None, alias="type"),
    priority: TaskPriority | None = None,
    project_id: UUID | None = None,
    assignee_id: str | None = None,
    q: str | None = Query(default=None, description="Substring of title or task key"),
    sort_by: TaskSortField = "due_date",
    order: Literal["asc", "desc"] = "asc",
    session: AsyncSession = Depends(get_session),
) -> DefaultLimitOffsetPage[TaskRead]:
    statement = select(Task)
    if status_filter is not None:
        statement = statement.where(col(Task.status) == status_filter)
    if type_filter is not None:
        statement = statement.where(col(Task.type) == type_filter)
    if priority is not None:
        statement = statement.where(col(Task.priority) == priority)
    if project_id is not None:
        statement = statement.where(col(Task.project_id) == project_id)
    if assignee_id is not None:
        statement = statement.where(col(Task.assignee_id) == assignee_id)
    if q and q.strip():
        needle = q.strip()
        statement = statement.where(
            or_(
                col(Task.title).icontains(needle, autoescape=True),
                col(Task.task_key).icontains(needle, autoescape=True),
            )
        )

    sort_column = _SORT_COLUMNS[sort_by]
    sort_expr = sort_column.desc() if order == "desc" else sort_column.asc()
    statement = statement.order_by(sort_expr.nulls_last(), col(Task.task_key).asc())
    return await paginate(session, statement)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    session: AsyncSession = Depends(get_session),
) -> Task:
    await _require_references(
        session,
        project_id=payload.project_id,
        assignee_id=payload.assignee_id,
        reporter_id=payload.reporter_id,
    )
    task = Task.model_validate(payload, update={"task_key": await generate_task_key(session, payload.type)})
    session.add(task)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Task key already taken, retry") from exc
    await session.refresh(task)
    logger.info("task.created task_id=%s key=%s", task.id, task.task_key)
    return task


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task: Task = Depends(get_task_or_404)) -> Task:
    return task


@router.patch("/{task_id}", response_model=TaskRead)
async def update_task(
    payload: TaskUpdate,
    task: Task = Depends(get_task_or_404),
    session: AsyncSession = Depends(get_session),
) -> Task:
    updates = payload.model_dump(exclude_unset=True)
    await _require_references(
        session,
        project_id=updates.get("project_id"),
        assignee_id=updates.get("assignee_id"),
        reporter_id=updates.get("reporter_id"),
    )
    for key, value in updates.items():
        if value is None and key in {"title", "status", "priority"}:
            continue
        setattr(task, key, value)
    task.updated_at = utcnow()
    task = await crud.save(session, task)
    logger.info("task.updated task_id=%s fields=%s", task.id, sorted(updates))
    return task


@router.delete("/{task_id}", response_model=OkResponse)
async def delete_task(
    task: Task = Depends(get_task_or_404),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    await crud.delete_where(session, TaskComment, col(TaskComment.task_id) == task.id)
    await session.delete(task)
    await session.commit()
    logger.info("task.deleted task_id=%s", task.id)
    return OkResponse()


@router.get("/{task_id}/comments", response_model=list[TaskCommentRead])
async def list_task_comments(
    task: Task = Depends(get_task_or_404),
    session: AsyncSession = Depends(get_session),
) -> list[TaskComment]:
    statement = (
        select(TaskComment)
        .where(col(TaskComment.task_id) == task.id)
        .order_by(col(TaskComment.created_at).asc())
    )
    return list(await session.exec(statement))


@router.post("/{task_id}/comments", response_model=TaskCommentRead, status_code=status.HTTP_201_CREATED)
async def create_task_comment(
    payload: TaskCommentCreate,
    task: Task = Depends(get_task_or_404),
    session: AsyncSession = Depends(get_session),
) -> TaskComment:
    if payload.author_id is not None and await session.get(Employee, payload.author_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="author_id is invalid")
    comment = TaskComment(task_id=task.id, author_id=payload.author_id, text=payload.text)
    task.updated_at = utcnow()
    session.add(task)
    return await crud.save(session, comment)
