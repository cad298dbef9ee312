from __future__ import annotations

import json
import logging

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import IntegrityError
from starlette.requests import Request

from hrms.core.config import Settings
from hrms.core.error_handling import integrity_error_handler, unhandled_exception_handler
from hrms.core.logging import JsonFormatter
from hrms.main import create_app


def _request(path: str = "/boom") -> Request:
    return Request({"type": "http", "method": "POST", "path": path, "headers": [], "query_string": b""})


@pytest.mark.asyncio
async def test_healthz(client: AsyncClient):
    response = await client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_validation_errors_are_reported_as_400(client: AsyncClient):
    response = await client.post("/api/v1/employees", json={"first_name": "NoId"})
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert any(error["loc"][-1] == "employee_id" for error in body["errors"])


@pytest.mark.asyncio
async def test_unhandled_exception_handler_hides_details(caplog):
    with caplog.at_level(logging.ERROR, logger="hrms.core.error_handling"):
        response = await unhandled_exception_handler(_request(), RuntimeError("secret stack detail"))

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body["detail"] == "Internal server error"
    assert "secret" not in response.body.decode()
    assert body["error_id"] in caplog.text


@pytest.mark.asyncio
async def test_integrity_error_handler_returns_409():
    exc = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed"))
    response = await integrity_error_handler(_request(), exc)
    assert response.status_code == 409
    assert "detail" in json.loads(response.body)


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord("hrms.test", logging.INFO, __file__, 1, "project.created key=%s", ("PAY",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "project.created key=PAY"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "hrms.test"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("API_PREFIX", "/api/v2")

    settings = Settings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.cors_origin_list == ["http://a.test", "http://b.test"]
    assert settings.api_prefix == "/api/v2"


@pytest.mark.asyncio
async def test_raising_route_returns_shaped_500():
    app = create_app()

    async def explode() -> None:
        raise RuntimeError("database password is hunter2")

    app.add_api_route("/explode", explode, methods=["GET"])
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://localhost") as client:
        response = await client.get("/explode")

    assert response.status_code == 500
    body = response.json()
    assert body["detail"] == "Internal server error"
    assert len(body["error_id"]) == 32
    assert "hunter2" not in response.text
