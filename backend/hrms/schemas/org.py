from __future__ import annotations

from datetime import datetime
from typing import Literal

from sqlmodel import Field, SQLModel

EmploymentStatus = Literal["Active", "Inactive", "On Leave", "Terminated"]


class EmployeeCreate(SQLModel):
    employee_id: str = Field(min_length=1, max_length=64)
    first_name: str = Field(min_length=1)
    last_name: str | None = None
    company_email: str | None = None
    employment_status: EmploymentStatus = "Active"
    title: str | None = None


class EmployeeUpdate(SQLModel):
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = None
    company_email: str | None = None
    employment_status: EmploymentStatus | None = None
    title: str | None = None


class EmployeeRead(SQLModel):
    employee_id: str
    first_name: str
    last_name: str | None = None
    company_email: str | None = None
    employment_status: str
    title: str | None = None
    created_at: datetime
    updated_at: datetime


class EmployeeSummary(SQLModel):
    employee_id: str
    first_name: str
    last_name: str | None = None
    name: str


class EmployeeOption(SQLModel):
    """Shape used by team pickers."""

    id: str
    name: str
    email: str | None = None
