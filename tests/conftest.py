import os
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path when pytest runs from a different CWD.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Hard override before the app is imported: in-memory SQLite, no rate limiting
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_COLOR"] = "false"

from string_analyzer import database  # noqa: E402
from string_analyzer import models  # noqa: E402,F401


@pytest.fixture(autouse=True)
def _reset_db():
    """Fresh schema for every test."""
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)
    yield


@pytest.fixture
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from string_analyzer.main import app

    with TestClient(app) as c:
        yield c
