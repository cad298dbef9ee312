from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel

from hrms.core.time import utcnow

EMPLOYMENT_STATUSES = ("Active", "Inactive", "On Leave", "Terminated")


class Employee(SQLModel, table=True):
    __tablename__ = "employees"

    employee_id: str = Field(primary_key=True, max_length=64)
    first_name: str = Field(index=True)
    last_name: str | None = Field(default=None, index=True)
    company_email: str | None = Field(default=None, unique=True)
    employment_status: str = Field(default="Active", index=True)
    title: str | None = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name or ''}".strip()
