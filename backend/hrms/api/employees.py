from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.api import tasks as tasks_api
from hrms.api.deps import get_employee_or_404
from hrms.core.logging import get_logger
from hrms.core.time import utcnow
from hrms.db import crud
from hrms.db.pagination import paginate
from hrms.db.session import get_session
from hrms.models.org import Employee
from hrms.models.projects import Project, ProjectTeamMember
from hrms.models.work import Task, TaskComment
from hrms.schemas.common import OkResponse
from hrms.schemas.org import EmployeeCreate, EmployeeRead, EmployeeUpdate, EmploymentStatus
from hrms.schemas.pagination import DefaultLimitOffsetPage
from hrms.schemas.work import TaskPriority, TaskRead, TaskSortField, TaskStatus, TaskStatusCounts, TaskType
from hrms.services import task_stats

router = APIRouter(prefix="/employees", tags=["employees"])
logger = get_logger(__name__)


@router.get("", response_model=DefaultLimitOffsetPage[EmployeeRead])
async def list_employees(
    status_filter: EmploymentStatus | None = Query(default=None, alias="status"),
    session: AsyncSession = Depends(get_session),
) -> DefaultLimitOffsetPage[EmployeeRead]:
    statement = select(Employee)
    if status_filter is not None:
        statement = statement.where(col(Employee.employment_status) == status_filter)
    statement = statement.order_by(col(Employee.employee_id).asc())
    return await paginate(session, statement)


@router.post("", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeCreate,
    session: AsyncSession = Depends(get_session),
) -> Employee:
    if await crud.get_by_id(session, Employee, payload.employee_id) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Employee already exists")

    emp = Employee.model_validate(payload)
    session.add(emp)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Employee create violates constraints",
        ) from exc

    await session.refresh(emp)
    logger.info("employee.created employee_id=%s", emp.employee_id)
    return emp


@router.get("/{employee_id}", response_model=EmployeeRead)
def get_employee(employee: Employee = Depends(get_employee_or_404)) -> Employee:
    return employee


@router.patch("/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    payload: EmployeeUpdate,
    employee: Employee = Depends(get_employee_or_404),
    session: AsyncSession = Depends(get_session),
) -> Employee:
    data = payload.model_dump(exclude_unset=True)
    for k, v in data.items():
        if v is None and k in {"first_name", "employment_status"}:
            continue
        setattr(employee, k, v)
    employee.updated_at = utcnow()

    session.add(employee)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Employee update violates constraints",
        ) from exc

    await session.refresh(employee)
    return employee


@router.delete("/{employee_id}", response_model=OkResponse)
async def delete_employee(
    employee: Employee = Depends(get_employee_or_404),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    led = (
        await session.exec(select(Project.key).where(col(Project.lead_id) == employee.employee_id))
    ).all()
    if led:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Employee leads project(s) {', '.join(sorted(led))}; reassign the lead first",
        )

    employee_id = employee.employee_id
    try:
        await crud.delete_where(session, ProjectTeamMember, col(ProjectTeamMember.employee_id) == employee_id)
        await crud.update_where(session, Task, col(Task.assignee_id) == employee_id, values={"assignee_id": None})
        await crud.update_where(session, Task, col(Task.reporter_id) == employee_id, values={"reporter_id": None})
        await crud.update_where(
            session, TaskComment, col(TaskComment.author_id) == employee_id, values={"author_id": None}
        )
        await session.delete(employee)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    logger.info("employee.deleted employee_id=%s", employee_id)
    return OkResponse()


@router.get("/{employee_id}/tasks", response_model=DefaultLimitOffsetPage[TaskRead])
async def list_employee_tasks(
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    type_filter: TaskType | None = Query(default=None, alias="type"),
    priority: TaskPriority | None = None,
    project_id: UUID | None = None,
    q: str | None = None,
    sort_by: TaskSortField = "due_date",
    order: Literal["asc", "desc"] = "asc",
    employee: Employee = Depends(get_employee_or_404),
    session: AsyncSession = Depends(get_session),
) -> DefaultLimitOffsetPage[TaskRead]:
    return await tasks_api.list_tasks(
        status_filter=status_filter,
        type_filter=type_filter,
        priority=priority,
        project_id=project_id,
        assignee_id=employee.employee_id,
        q=q,
        sort_by=sort_by,
        order=order,
        session=session,
    )


@router.get("/{employee_id}/tasks/summary", response_model=TaskStatusCounts)
async def summarize_employee_tasks(
    project_id: UUID | None = None,
    employee: Employee = Depends(get_employee_or_404),
    session: AsyncSession = Depends(get_session),
) -> TaskStatusCounts:
    """To Do / In Progress / Done tallies for the employee's assigned tasks."""
    conditions = [col(Task.assignee_id) == employee.employee_id]
    if project_id is not None:
        conditions.append(col(Task.project_id) == project_id)
    return await task_stats.status_counts(session, *conditions)
