import os

import pytest
from fastapi.testclient import TestClient

# Default to the memory backend so tests need no running MongoDB
os.environ["PERSISTENCE_BACKEND"] = "memory"

from todo_api.main import app  # noqa: E402


@pytest.fixture
def home_file(tmp_path, monkeypatch):
    path = tmp_path / "README.md"
    path.write_text("# Todo API\n\nHello from the home page.\n", encoding="utf-8")
    monkeypatch.setenv("HOME_FILE", str(path))
    return path


@pytest.fixture
def client(home_file):
    # Entering the context runs the lifespan, giving each test a fresh store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
