"""Project writes that touch the role-scoped team.

Creating or updating a project and (re)building its team happens in a single
session transaction: every statement is flushed into the same transaction and
committed once, and any failure rolls the whole request back.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.core.logging import get_logger
from hrms.core.time import utcnow
from hrms.db import crud
from hrms.models.org import Employee
from hrms.models.projects import (
    ROLE_MEMBER,
    ROLE_PROJECT_MANAGER,
    ROLE_TECHNICAL_LEAD,
    Project,
    ProjectTeamMember,
)
from hrms.models.work import Task, TaskComment
from hrms.schemas.projects import ProjectCreate, ProjectUpdate
from hrms.services.employee_lookup import find_employee

logger = get_logger(__name__)

TEAM_FIELDS = frozenset({"project_lead", "project_managers", "technical_leads", "team_members"})
# Columns that may not be cleared by sending null.
_REQUIRED_COLUMNS = frozenset({"name", "type", "status"})


class ProjectWriteError(ValueError):
    """A project write was rejected because of its input (reported as 400)."""


def team_assignments(
    *,
    project_managers: Iterable[str] | None,
    technical_leads: Iterable[str] | None,
    team_members: Iterable[str] | None,
) -> list[tuple[str, list[str]]]:
    return [
        (ROLE_PROJECT_MANAGER, list(project_managers or [])),
        (ROLE_TECHNICAL_LEAD, list(technical_leads or [])),
        (ROLE_MEMBER, list(team_members or [])),
    ]


async def require_lead(session: AsyncSession, reference: str) -> Employee:
    lead = await find_employee(session, reference)
    if lead is None:
        raise ProjectWriteError(f"Project lead '{reference}' not found in the system")
    return lead


async def build_team_rows(
    session: AsyncSession,
    project_id: UUID,
    assignments: Sequence[tuple[str, Sequence[str]]],
) -> list[ProjectTeamMember]:
    rows: list[ProjectTeamMember] = []
    seen: set[tuple[str, str]] = set()
    for role, references in assignments:
        for reference in references:
            employee = await find_employee(session, reference)
            if employee is None:
                raise ProjectWriteError(f"Employee '{reference}' not found in the system")
            pair = (employee.employee_id, role)
            if pair in seen:
                continue
            seen.add(pair)
            rows.append(ProjectTeamMember(project_id=project_id, employee_id=employee.employee_id, role=role))
    return rows


async def create_project_with_team(session: AsyncSession, payload: ProjectCreate) -> Project:
    try:
        lead = await require_lead(session, payload.project_lead)
        project = Project(**payload.model_dump(exclude=TEAM_FIELDS), lead_id=lead.employee_id)
        session.add(project)
        await session.flush()

        rows = await build_team_rows(
            session,
            project.project_id,
            team_assignments(
                project_managers=payload.project_managers,
                technical_leads=payload.technical_leads,
                team_members=payload.team_members,
            ),
        )
        session.add_all(rows)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    await session.refresh(project)
    logger.info(
        "project.created project_id=%s key=%s team_size=%d",
        project.project_id,
        project.key,
        len(rows),
    )
    return project


async def update_project_with_team(session: AsyncSession, project: Project, payload: ProjectUpdate) -> Project:
    updates = payload.model_dump(exclude_unset=True, exclude=TEAM_FIELDS)
    try:
        if payload.project_lead is not None:
            lead = await require_lead(session, payload.project_lead)
            project.lead_id = lead.employee_id

        for key, value in updates.items():
            if value is None and key in _REQUIRED_COLUMNS:
                continue
            setattr(project, key, value)
        if project.start_date and project.end_date and project.end_date < project.start_date:
            raise ProjectWriteError("end_date must not be before start_date")
        project.updated_at = utcnow()
        session.add(project)

        if payload.replaces_team:
            await crud.delete_where(
                session,
                ProjectTeamMember,
                col(ProjectTeamMember.project_id) == project.project_id,
            )
            rows = await build_team_rows(
                session,
                project.project_id,
                team_assignments(
                    project_managers=payload.project_managers,
                    technical_leads=payload.technical_leads,
                    team_members=payload.team_members,
                ),
            )
            session.add_all(rows)
            logger.info("project.team.replaced project_id=%s team_size=%d", project.project_id, len(rows))

        await session.commit()
    except Exception:
        await session.rollback()
        raise

    await session.refresh(project)
    logger.info("project.updated project_id=%s fields=%s", project.project_id, sorted(updates))
    return project


async def delete_project(session: AsyncSession, project: Project) -> None:
    project_id = project.project_id
    try:
        task_ids = list(await session.exec(select(Task.id).where(col(Task.project_id) == project_id)))
        if task_ids:
            await crud.delete_where(session, TaskComment, col(TaskComment.task_id).in_(task_ids))
        await crud.delete_where(session, Task, col(Task.project_id) == project_id)
        await crud.delete_where(session, ProjectTeamMember, col(ProjectTeamMember.project_id) == project_id)
        await session.delete(project)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    logger.info("project.deleted project_id=%s tasks=%d", project_id, len(task_ids))
