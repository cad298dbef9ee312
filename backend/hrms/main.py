"""FastAPI entry point: ``uvicorn hrms.main:app``."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi_pagination import add_pagination

from hrms.api import employees, health, projects, tasks
from hrms.core.config import settings
from hrms.core.error_handling import install_error_handling
from hrms.core.logging import configure_logging, get_logger
from hrms.db.session import init_db

configure_logging(settings.log_level, settings.log_format)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("app.startup environment=%s", settings.environment)
    if settings.db_auto_migrate:
        await init_db()
    yield
    logger.info("app.shutdown")


def create_app() -> FastAPI:
    app = FastAPI(title="HRMS Projects API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handling(app)

    app.include_router(health.router)
    app.include_router(employees.router, prefix=settings.api_prefix)
    app.include_router(projects.router, prefix=settings.api_prefix)
    app.include_router(tasks.router, prefix=settings.api_prefix)

    add_pagination(app)
    return app


app = create_app()
