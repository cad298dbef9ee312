from __future__ import annotations

import pytest

from hrms.services.employee_lookup import find_employee

pytestmark = pytest.mark.asyncio


async def test_find_employee_by_exact_id(session, employees):
    employee = await find_employee(session, "EMP003")
    assert employee is not None
    assert employee.first_name == "Carol"


async def test_find_employee_by_first_and_last_name(session, employees):
    employee = await find_employee(session, "Alice Cooper")
    assert employee is not None
    assert employee.employee_id == "EMP005"


async def test_find_employee_first_name_only_prefers_lowest_id(session, employees):
    employee = await find_employee(session, "Alice")
    assert employee is not None
    assert employee.employee_id == "EMP001"


async def test_find_employee_ignores_parts_after_last_name(session, employees):
    employee = await find_employee(session, "  Bob   Smith  Jr ")
    assert employee is not None
    assert employee.employee_id == "EMP002"


async def test_find_employee_wrong_last_name_is_none(session, employees):
    assert await find_employee(session, "Bob Johnson") is None


@pytest.mark.parametrize("reference", ["", "   ", None, "Nobody"])
async def test_find_employee_unresolvable_references(session, employees, reference):
    assert await find_employee(session, reference) is None
