import os

# Base en memoria para cualquier init_db() disparado por los tests
os.environ["TODO_DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from todo_api.api.deps import get_todo_repo
from todo_api.infrastructure.db.bootstrap import ensure_tables
from todo_api.infrastructure.db.database import build_engine, build_session_factory
from todo_api.main import app
from todo_api.repositories.todo_repo import TodoRepository


@pytest.fixture
def engine():
    eng = build_engine("sqlite://")
    ensure_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def repo(engine):
    return TodoRepository(build_session_factory(engine))


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_todo_repo] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
