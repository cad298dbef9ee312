"""Resolve the employee references used by project team forms."""

from __future__ import annotations

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from hrms.models.org import Employee


async def find_employee(session: AsyncSession, reference: str | None) -> Employee | None:
    """Find an employee by id, or by "First Last" / "First" name.

    An exact ``employee_id`` match wins. Otherwise the reference is split on
    whitespace: two or more parts match first and last name, a single part
    matches the first name only. When several employees share the name the
    lowest ``employee_id`` is returned.
    """
    ref = (reference or "").strip()
    if not ref:
        return None

    employee = await session.get(Employee, ref)
    if employee is not None:
        return employee

    parts = ref.split()
    statement = select(Employee).where(col(Employee.first_name) == parts[0])
    if len(parts) > 1:
        statement = statement.where(col(Employee.last_name) == parts[1])
    statement = statement.order_by(col(Employee.employee_id).asc()).limit(1)
    return (await session.exec(statement)).first()
