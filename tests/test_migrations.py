"""Alembic migrations against a throwaway SQLite file."""
import os

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from string_analyzer import config as app_config

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _alembic_config() -> Config:
    # No ini file: keeps alembic from reconfiguring the app's logging
    cfg = Config()
    cfg.set_main_option("script_location", os.path.join(PROJECT_ROOT, "alembic"))
    return cfg


def test_upgrade_uses_settings_default_when_database_url_unset(tmp_path, monkeypatch):
    db_file = tmp_path / "migrated.db"
    url = f"sqlite:///{db_file}"
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setattr(
        app_config, "get_settings", lambda: app_config.Settings(DATABASE_URL=url)
    )

    command.upgrade(_alembic_config(), "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        assert "strings" in inspector.get_table_names()
        indexed = {ix["name"] for ix in inspector.get_indexes("strings")}
        assert "ix_strings_created_at" in indexed
    finally:
        engine.dispose()
