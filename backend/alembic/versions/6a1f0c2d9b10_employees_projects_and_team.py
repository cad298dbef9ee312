"""Employees, projects and role-scoped project teams

Revision ID: 6a1f0c2d9b10
Revises:
Create Date: 2026-10-12

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "6a1f0c2d9b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # 1) Employees
    op.create_table(
        "employees",
        sa.Column("employee_id", sa.String(length=64), primary_key=True, nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("company_email", sa.String(), nullable=True),
        sa.Column("employment_status", sa.String(), nullable=False, server_default="Active"),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("company_email", name="uq_employees_company_email"),
    )
    op.create_index("ix_employees_first_name", "employees", ["first_name"], unique=False)
    op.create_index("ix_employees_last_name", "employees", ["last_name"], unique=False)
    op.create_index("ix_employees_employment_status", "employees", ["employment_status"], unique=False)

    # 2) Projects, each with exactly one lead
    op.create_table(
        "projects",
        sa.Column("project_id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("key", sa.String(length=10), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("lead_id", sa.String(length=64), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="Active"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["lead_id"], ["employees.employee_id"]),
    )
    op.create_index("ix_projects_key", "projects", ["key"], unique=True)
    op.create_index("ix_projects_name", "projects", ["name"], unique=False)
    op.create_index("ix_projects_lead_id", "projects", ["lead_id"], unique=False)
    op.create_index("ix_projects_status", "projects", ["status"], unique=False)

    # 3) Team rows: one employee, one project, one role
    op.create_table(
        "project_team_members",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("employee_id", sa.String(length=64), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("joined_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.project_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.employee_id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "project_id",
            "employee_id",
            "role",
            name="uq_project_team_members_project_employee_role",
        ),
        sa.CheckConstraint(
            "role IN ('Lead', 'Project Manager', 'Technical Lead', 'Member')",
            name="ck_project_team_members_role",
        ),
    )
    op.create_index("ix_project_team_members_project_id", "project_team_members", ["project_id"], unique=False)
    op.create_index("ix_project_team_members_employee_id", "project_team_members", ["employee_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_project_team_members_employee_id", table_name="project_team_members")
    op.drop_index("ix_project_team_members_project_id", table_name="project_team_members")
    op.drop_table("project_team_members")

    op.drop_index("ix_projects_status", table_name="projects")
    op.drop_index("ix_projects_lead_id", table_name="projects")
    op.drop_index("ix_projects_name", table_name="projects")
    op.drop_index("ix_projects_key", table_name="projects")
    op.drop_table("projects")

    op.drop_index("ix_employees_employment_status", table_name="employees")
    op.drop_index("ix_employees_last_name", table_name="employees")
    op.drop_index("ix_employees_first_name", table_name="employees")
    op.drop_table("employees")
