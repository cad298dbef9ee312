from __future__ import annotations

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, UniqueConstraint
from sqlmodel import Field, SQLModel

from hrms.core.time import today, utcnow

PROJECT_KEY_PATTERN = r"^[A-Z0-9]{2,10}$"
PROJECT_STATUSES = ("Active", "Completed", "On Hold", "Cancelled", "Not Started")

ROLE_LEAD = "Lead"
ROLE_PROJECT_MANAGER = "Project Manager"
ROLE_TECHNICAL_LEAD = "Technical Lead"
ROLE_MEMBER = "Member"
TEAM_ROLES = (ROLE_LEAD, ROLE_PROJECT_MANAGER, ROLE_TECHNICAL_LEAD, ROLE_MEMBER)


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    project_id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(index=True)
    key: str = Field(index=True, unique=True, max_length=10)
    type: str
    description: str | None = None

    # The lead lives on the project row; team roles live in project_team_members.
    lead_id: str = Field(foreign_key="employees.employee_id", index=True)

    start_date: date | None = None
    end_date: date | None = None
    status: str = Field(default="Active", index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ProjectTeamMember(SQLModel, table=True):
    __tablename__ = "project_team_members"
    __table_args__ = (
        UniqueConstraint("project_id", "employee_id", "role", name="uq_project_team_members_project_employee_role"),
        CheckConstraint(
            "role IN (" + ", ".join(f"'{role}'" for role in TEAM_ROLES) + ")",
            name="ck_project_team_members_role",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.project_id", ondelete="CASCADE", index=True)
    employee_id: str = Field(foreign_key="employees.employee_id", ondelete="CASCADE", index=True, max_length=64)
    role: str = Field(default=ROLE_MEMBER)  # Lead | Project Manager | Technical Lead | Member
    joined_date: date = Field(default_factory=today)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
