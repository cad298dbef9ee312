"""Project CRUD and team membership endpoints."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.api.deps import get_project_or_404
from hrms.core.logging import get_logger
from hrms.db import crud
from hrms.db.pagination import paginate
from hrms.db.session import get_session
from hrms.models.org import Employee
from hrms.models.projects import Project, ProjectTeamMember
from hrms.schemas.common import OkResponse
from hrms.schemas.org import EmployeeOption
from hrms.schemas.pagination import DefaultLimitOffsetPage
from hrms.schemas.projects import (
    ProjectCreate,
    ProjectMemberAdd,
    ProjectMemberRead,
    ProjectRead,
    ProjectStatus,
    ProjectUpdate,
)
from hrms.services import project_team
from hrms.services.project_views import build_project_read, build_project_reads

router = APIRouter(prefix="/projects", tags=["projects"])
logger = get_logger(__name__)

ProjectSort = Literal["name-asc", "name-desc", "updated", "status"]


@router.get("", response_model=DefaultLimitOffsetPage[ProjectRead])
async def list_projects(
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    type_filter: str | None = Query(default=None, alias="type"),
    q: str | None = Query(default=None, description="Substring of project name or key"),
    sort: ProjectSort = "name-asc",
    session: AsyncSession = Depends(get_session),
) -> DefaultLimitOffsetPage[ProjectRead]:
    statement = select(Project)
    if status_filter is not None:
        statement = statement.where(col(Project.status) == status_filter)
    if type_filter:
        statement = statement.where(col(Project.type) == type_filter)
    if q and q.strip():
        needle = q.strip()
        statement = statement.where(
            or_(
                col(Project.name).icontains(needle, autoescape=True),
                col(Project.key).icontains(needle, autoescape=True),
            )
        )

    name_order = func.lower(col(Project.name))
    if sort == "name-desc":
        statement = statement.order_by(name_order.desc())
    elif sort == "updated":
        statement = statement.order_by(col(Project.updated_at).desc())
    elif sort == "status":
        statement = statement.order_by(col(Project.status).asc(), name_order.asc())
    else:
        statement = statement.order_by(name_order.asc())

    async def _transform(items: Sequence[Project]) -> Sequence[ProjectRead]:
        return await build_project_reads(session, items)

    return await paginate(session, statement, transformer=_transform)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    payload: ProjectCreate,
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    """Create a project and assign its team in one transaction.

    The lead must resolve, every named team member must resolve, and the key
    must be unique; otherwise nothing is written.
    """
    existing = (await session.exec(select(Project.project_id).where(col(Project.key) == payload.key))).first()
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Project key '{payload.key}' already exists",
        )
    try:
        project = await project_team.create_project_with_team(session, payload)
    except project_team.ProjectWriteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Project already exists or violates constraints",
        ) from exc
    return await build_project_read(session, project)


@router.get("/employees/selection", response_model=list[EmployeeOption])
async def list_employees_for_selection(
    session: AsyncSession = Depends(get_session),
) -> list[EmployeeOption]:
    statement = (
        select(Employee)
        .where(col(Employee.employment_status) == "Active")
        .order_by(col(Employee.first_name).asc(), col(Employee.last_name).asc())
    )
    return [
        EmployeeOption(id=emp.employee_id, name=emp.full_name, email=emp.company_email)
        for emp in await session.exec(statement)
    ]


@router.post("/members", response_model=ProjectMemberRead, status_code=status.HTTP_201_CREATED)
async def add_project_member(
    payload: ProjectMemberAdd,
    session: AsyncSession = Depends(get_session),
) -> ProjectTeamMember:
    if payload.project_id is None or not payload.employee_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Project ID and Employee ID are required",
        )
    if await crud.get_by_id(session, Project, payload.project_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    if await crud.get_by_id(session, Employee, payload.employee_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Employee not found")

    existing = (
        await session.exec(
            select(ProjectTeamMember).where(
                col(ProjectTeamMember.project_id) == payload.project_id,
                col(ProjectTeamMember.employee_id) == payload.employee_id,
            )
        )
    ).first()
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Employee is already a member of this project",
        )

    member = await crud.create(
        session,
        ProjectTeamMember,
        project_id=payload.project_id,
        employee_id=payload.employee_id,
        role=payload.role,
    )
    logger.info(
        "project.member.added project_id=%s employee_id=%s role=%s",
        member.project_id,
        member.employee_id,
        member.role,
    )
    return member


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project: Project = Depends(get_project_or_404),
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    return await build_project_read(session, project)


@router.put("/{project_id}", response_model=ProjectRead)
@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    payload: ProjectUpdate,
    project: Project = Depends(get_project_or_404),
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    try:
        project = await project_team.update_project_with_team(session, project, payload)
    except project_team.ProjectWriteError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Project update violates constraints",
        ) from exc
    return await build_project_read(session, project)


@router.delete("/{project_id}", response_model=OkResponse)
async def delete_project(
    project: Project = Depends(get_project_or_404),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    await project_team.delete_project(session, project)
    return OkResponse()


@router.get("/{project_id}/members", response_model=list[ProjectMemberRead])
async def list_project_members(
    project: Project = Depends(get_project_or_404),
    session: AsyncSession = Depends(get_session),
) -> list[ProjectTeamMember]:
    statement = (
        select(ProjectTeamMember)
        .where(col(ProjectTeamMember.project_id) == project.project_id)
        .order_by(col(ProjectTeamMember.role).asc(), col(ProjectTeamMember.employee_id).asc())
    )
    return list(await session.exec(statement))


@router.delete("/{project_id}/members/{employee_id}", response_model=OkResponse)
async def remove_project_member(
    employee_id: str,
    project: Project = Depends(get_project_or_404),
    session: AsyncSession = Depends(get_session),
) -> OkResponse:
    removed = await crud.delete_where(
        session,
        ProjectTeamMember,
        col(ProjectTeamMember.project_id) == project.project_id,
        col(ProjectTeamMember.employee_id) == employee_id,
    )
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee is not a member of this project",
        )
    await session.commit()
    logger.info("project.member.removed project_id=%s employee_id=%s", project.project_id, employee_id)
    return OkResponse()
