"""Read models for projects with their lead and role-grouped team."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.models.org import Employee
from hrms.models.projects import (
    ROLE_PROJECT_MANAGER,
    ROLE_TECHNICAL_LEAD,
    TEAM_ROLES,
    Project,
    ProjectTeamMember,
)
from hrms.schemas.org import EmployeeSummary
from hrms.schemas.projects import ProjectRead, TeamMemberSummary
from hrms.schemas.work import TaskStatusCounts
from hrms.services.task_stats import status_counts_by_project


def employee_summary(employee: Employee) -> EmployeeSummary:
    return EmployeeSummary(
        employee_id=employee.employee_id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        name=employee.full_name,
    )


def _member_sort_key(member: ProjectTeamMember) -> tuple[int, str]:
    role_rank = TEAM_ROLES.index(member.role) if member.role in TEAM_ROLES else len(TEAM_ROLES)
    return role_rank, member.employee_id


async def build_project_reads(session: AsyncSession, projects: Sequence[Project]) -> list[ProjectRead]:
    """Batch-load leads, team rows and task tallies for ``projects``."""
    if not projects:
        return []

    project_ids = [project.project_id for project in projects]
    members = list(
        await session.exec(
            select(ProjectTeamMember).where(col(ProjectTeamMember.project_id).in_(project_ids))
        )
    )

    employee_ids = {project.lead_id for project in projects} | {m.employee_id for m in members}
    employees = {
        employee.employee_id: employee
        for employee in await session.exec(
            select(Employee).where(col(Employee.employee_id).in_(employee_ids))
        )
    }

    task_counts = await status_counts_by_project(session, project_ids)

    members_by_project: dict[UUID, list[ProjectTeamMember]] = defaultdict(list)
    for member in sorted(members, key=_member_sort_key):
        members_by_project[member.project_id].append(member)

    reads: list[ProjectRead] = []
    for project in projects:
        team = [m for m in members_by_project.get(project.project_id, []) if m.employee_id in employees]
        lead = employees.get(project.lead_id)
        counts = task_counts.get(project.project_id, TaskStatusCounts())
        reads.append(
            ProjectRead.model_validate(project, from_attributes=True).model_copy(
                update={
                    "project_lead": employee_summary(lead) if lead else None,
                    "project_managers": [
                        employee_summary(employees[m.employee_id]) for m in team if m.role == ROLE_PROJECT_MANAGER
                    ],
                    "technical_leads": [
                        employee_summary(employees[m.employee_id]) for m in team if m.role == ROLE_TECHNICAL_LEAD
                    ],
                    "team_members": [
                        TeamMemberSummary(
                            **employee_summary(employees[m.employee_id]).model_dump(),
                            role=m.role,
                            joined_date=m.joined_date,
                        )
                        for m in team
                    ],
                    "task_counts": counts,
                    "progress": counts.progress,
                }
            )
        )
    return reads


async def build_project_read(session: AsyncSession, project: Project) -> ProjectRead:
    return (await build_project_reads(session, [project]))[0]
