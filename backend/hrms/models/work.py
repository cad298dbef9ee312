from __future__ import annotations

from datetime import date, datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from hrms.core.time import utcnow

TASK_TYPES = ("Task", "Bug", "Story")
TASK_STATUSES = ("To Do", "In Progress", "Done")
TASK_PRIORITIES = ("Low", "Medium", "High", "Critical")


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_key: str = Field(index=True, unique=True)  # BUG-001, STOR-002, TASK-003
    title: str
    description: str | None = None

    type: str = Field(default="Task")
    status: str = Field(default="To Do", index=True)
    priority: str = Field(default="Medium")

    project_id: UUID | None = Field(default=None, foreign_key="projects.project_id", index=True)
    assignee_id: str | None = Field(default=None, foreign_key="employees.employee_id", index=True)
    reporter_id: str | None = Field(default=None, foreign_key="employees.employee_id")

    due_date: date | None = None
    estimate: str | None = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class TaskComment(SQLModel, table=True):
    __tablename__ = "task_comments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    task_id: UUID = Field(foreign_key="tasks.id", ondelete="CASCADE", index=True)
    author_id: str | None = Field(default=None, foreign_key="employees.employee_id")
    text: str
    created_at: datetime = Field(default_factory=utcnow)
