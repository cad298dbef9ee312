from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

BACKEND_ROOT = Path(__file__).resolve().parents[1]


def _alembic_config(db_path: Path) -> Config:
    config = Config(str(BACKEND_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(BACKEND_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{db_path}")
    config.attributes["configure_logger"] = False
    return config


def test_upgrade_to_head_creates_schema(tmp_path):
    db_path = tmp_path / "migrated.db"
    command.upgrade(_alembic_config(db_path), "head")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"employees", "projects", "project_team_members", "tasks", "task_comments"} <= tables

        team_uniques = {tuple(u["column_names"]) for u in inspector.get_unique_constraints("project_team_members")}
        assert ("project_id", "employee_id", "role") in team_uniques

        project_columns = {c["name"] for c in inspector.get_columns("projects")}
        assert {"project_id", "key", "lead_id", "status", "start_date", "end_date"} <= project_columns
    finally:
        engine.dispose()


def test_downgrade_to_base_drops_schema(tmp_path):
    db_path = tmp_path / "migrated.db"
    config = _alembic_config(db_path)
    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()
