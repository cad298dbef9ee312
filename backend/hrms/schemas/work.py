from __future__ import annotations

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from sqlmodel import Field, SQLModel

TaskType = Literal["Task", "Bug", "Story"]
TaskStatus = Literal["To Do", "In Progress", "Done"]
TaskPriority = Literal["Low", "Medium", "High", "Critical"]
TaskSortField = Literal["due_date", "created_at", "updated_at", "title", "status", "priority", "task_key"]


class TaskCreate(SQLModel):
    title: str = Field(min_length=1)
    description: str | None = None
    type: TaskType = "Task"
    status: TaskStatus = "To Do"
    priority: TaskPriority = "Medium"
    project_id: UUID | None = None
    assignee_id: str | None = None
    reporter_id: str | None = None
    due_date: date | None = None
    estimate: str | None = None


class TaskUpdate(SQLModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    project_id: UUID | None = None
    assignee_id: str | None = None
    reporter_id: str | None = None
    due_date: date | None = None
    estimate: str | None = None


class TaskRead(SQLModel):
    id: UUID
    task_key: str
    title: str
    description: str | None = None
    type: str
    status: str
    priority: str
    project_id: UUID | None = None
    assignee_id: str | None = None
    reporter_id: str | None = None
    due_date: date | None = None
    estimate: str | None = None
    created_at: datetime
    updated_at: datetime


class TaskCommentCreate(SQLModel):
    text: str = Field(min_length=1)
    author_id: str | None = None


class TaskCommentRead(SQLModel):
    id: UUID
    task_id: UUID
    author_id: str | None = None
    text: str
    created_at: datetime


class TaskStatusCounts(SQLModel):
    to_do: int = 0
    in_progress: int = 0
    done: int = 0
    total: int = 0

    @property
    def progress(self) -> int:
        """Percentage of tasks that are done, rounded down."""
        return self.done * 100 // self.total if self.total else 0
