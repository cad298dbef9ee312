"""Shared fixtures: an in-memory database per test and an ASGI client bound to it."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

# Must be set before the app settings are imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DB_AUTO_MIGRATE"] = "false"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from hrms.db.session import build_engine, build_session_maker, get_session  # noqa: E402
from hrms.main import app  # noqa: E402
from hrms.models.org import Employee  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SEED_EMPLOYEES = [
    ("EMP001", "Alice", "Johnson", "alice.johnson@example.com", "Active"),
    ("EMP002", "Bob", "Smith", "bob.smith@example.com", "Active"),
    ("EMP003", "Carol", "Chen", "carol.chen@example.com", "Active"),
    ("EMP004", "David", "Wilson", "david.wilson@example.com", "Active"),
    ("EMP005", "Alice", "Cooper", "alice.cooper@example.com", "Active"),
    ("EMP006", "Erin", "Miller", "erin.miller@example.com", "Inactive"),
]


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = build_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(engine)


@pytest_asyncio.fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def employees(session: AsyncSession) -> list[Employee]:
    rows = [
        Employee(
            employee_id=employee_id,
            first_name=first_name,
            last_name=last_name,
            company_email=email,
            employment_status=status,
        )
        for employee_id, first_name, last_name, email, status in SEED_EMPLOYEES
    ]
    session.add_all(rows)
    await session.commit()
    return rows


@pytest_asyncio.fixture
async def client(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient, None]:
    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as request_session:
            yield request_session

    app.dependency_overrides[get_session] = get_session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client
    app.dependency_overrides.clear()
