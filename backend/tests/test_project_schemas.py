# ruff: noqa

from datetime import date

import pytest
from pydantic import ValidationError

from hrms.schemas.projects import ProjectCreate, ProjectUpdate


def _payload(**overrides):
    data = {"name": "Payroll revamp", "key": "PAY", "type": "Software", "project_lead": "Alice Johnson"}
    data.update(overrides)
    return data


def test_project_create_defaults():
    payload = ProjectCreate.model_validate(_payload())
    assert payload.status == "Active"
    assert payload.project_managers == []
    assert payload.team_members == []


@pytest.mark.parametrize("key", ["P", "pay", "PAY-1", "ABCDEFGHIJK", ""])
def test_project_create_rejects_bad_keys(key):
    with pytest.raises(ValidationError):
        ProjectCreate.model_validate(_payload(key=key))


@pytest.mark.parametrize("key", ["PA", "PAY2026", "ABCDEFGHIJ"])
def test_project_create_accepts_good_keys(key):
    assert ProjectCreate.model_validate(_payload(key=key)).key == key


def test_project_create_rejects_unknown_status():
    with pytest.raises(ValidationError):
        ProjectCreate.model_validate(_payload(status="Planning"))


def test_project_create_rejects_end_before_start():
    with pytest.raises(ValidationError):
        ProjectCreate.model_validate(_payload(start_date="2026-05-10", end_date="2026-05-01"))


def test_project_create_accepts_same_day_dates():
    payload = ProjectCreate.model_validate(_payload(start_date="2026-05-10", end_date="2026-05-10"))
    assert payload.end_date == date(2026, 5, 10)


def test_project_update_replaces_team_only_when_a_list_is_sent():
    assert ProjectUpdate.model_validate({"name": "x"}).replaces_team is False
    assert ProjectUpdate.model_validate({"team_members": []}).replaces_team is True
    assert ProjectUpdate.model_validate({"technical_leads": ["Carol Chen"]}).replaces_team is True
