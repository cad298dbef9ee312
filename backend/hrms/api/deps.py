from __future__ import annotations

from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.db import crud
from hrms.db.session import get_session
from hrms.models.org import Employee
from hrms.models.projects import Project
from hrms.models.work import Task


async def get_project_or_404(
    project_id: UUID,
    session: AsyncSession = Depends(get_session),
) -> Project:
    project = await crud.get_by_id(session, Project, project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


async def get_employee_or_404(
    employee_id: str,
    session: AsyncSession = Depends(get_session),
) -> Employee:
    employee = await crud.get_by_id(session, Employee, employee_id)
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")
    return employee


async def get_task_or_404(
    task_id: UUID,
    session: AsyncSession = Depends(get_session),
) -> Task:
    task = await crud.get_by_id(session, Task, task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task
