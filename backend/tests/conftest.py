import importlib.util
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db import Store
from app.main import create_app

BACKEND_DIR = Path(__file__).resolve().parent.parent


def load_module(relative_path: str):
    """Import a file that does not live in a package (scripts, migrations)."""
    path = BACKEND_DIR / relative_path
    spec = importlib.util.spec_from_file_location(path.stem, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def sqlite_url(tmp_path) -> str:
    return f"sqlite+pysqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def store(tmp_path):
    with Store(sqlite_url(tmp_path)) as s:
        s.ensure_schema()
        yield s


@pytest.fixture
def db(store):
    session = store.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(database_url=sqlite_url(tmp_path), timezone="UTC"))
    with TestClient(app) as c:
        yield c
