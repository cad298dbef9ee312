from __future__ import annotations

import re
from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import field_validator, model_validator
from sqlmodel import Field, SQLModel

from hrms.models.projects import PROJECT_KEY_PATTERN
from hrms.schemas.org import EmployeeSummary
from hrms.schemas.work import TaskStatusCounts

ProjectStatus = Literal["Active", "Completed", "On Hold", "Cancelled", "Not Started"]
TeamRole = Literal["Lead", "Project Manager", "Technical Lead", "Member"]

_KEY_RE = re.compile(PROJECT_KEY_PATTERN)


def _check_dates(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and end < start:
        raise ValueError("end_date must not be before start_date")


class ProjectCreate(SQLModel):
    name: str = Field(min_length=1)
    key: str
    type: str = Field(min_length=1)
    description: str | None = None
    status: ProjectStatus = "Active"

    # Employees are referenced by employee_id or by "First Last" name.
    project_lead: str = Field(min_length=1)
    project_managers: list[str] = Field(default_factory=list)
    technical_leads: list[str] = Field(default_factory=list)
    team_members: list[str] = Field(default_factory=list)

    start_date: date | None = None
    end_date: date | None = None

    @field_validator("key")
    @classmethod
    def _validate_key(cls, value: str) -> str:
        if not _KEY_RE.match(value):
            raise ValueError("Project key must be 2-10 uppercase letters or numbers")
        return value

    @model_validator(mode="after")
    def _validate_dates(self) -> ProjectCreate:
        _check_dates(self.start_date, self.end_date)
        return self


class ProjectUpdate(SQLModel):
    """Partial update. The project key is immutable and is not accepted here.

    Supplying any of the team lists replaces the whole team.
    """

    name: str | None = Field(default=None, min_length=1)
    type: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: ProjectStatus | None = None

    project_lead: str | None = Field(default=None, min_length=1)
    project_managers: list[str] | None = None
    technical_leads: list[str] | None = None
    team_members: list[str] | None = None

    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def _validate_dates(self) -> ProjectUpdate:
        _check_dates(self.start_date, self.end_date)
        return self

    @property
    def replaces_team(self) -> bool:
        return any(
            value is not None
            for value in (self.project_managers, self.technical_leads, self.team_members)
        )


class TeamMemberSummary(EmployeeSummary):
    role: str
    joined_date: date


class ProjectRead(SQLModel):
    project_id: UUID
    name: str
    key: str
    type: str
    description: str | None = None
    lead_id: str
    start_date: date | None = None
    end_date: date | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    project_lead: EmployeeSummary | None = None
    project_managers: list[EmployeeSummary] = Field(default_factory=list)
    technical_leads: list[EmployeeSummary] = Field(default_factory=list)
    team_members: list[TeamMemberSummary] = Field(default_factory=list)

    task_counts: TaskStatusCounts = Field(default_factory=TaskStatusCounts)
    progress: int = 0


class ProjectMemberAdd(SQLModel):
    project_id: UUID | None = None
    employee_id: str | None = None
    role: TeamRole = "Member"


class ProjectMemberRead(SQLModel):
    id: UUID
    project_id: UUID
    employee_id: str
    role: str
    joined_date: date
    created_at: datetime
