"""
Shared fixtures: an application bound to a throwaway SQLite file and helpers
for creating buckets and building auth headers.
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from bucketkv.config import Settings
from bucketkv.main import create_app


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "test.db")


@pytest.fixture
def app_client(db_path: str) -> TestClient:
    app = create_app(Settings(db_path=db_path))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def make_bucket(app_client: TestClient):
    """Create a bucket and return its JSON body ({bucket_id, token})."""
    counter = itertools.count()

    def _make(email: str | None = None) -> dict:
        email = email or f"user{next(counter)}@example.com"
        response = app_client.post("/bucket", json={"email": email})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def auth_headers():
    def _headers(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def db_session(db_path: str):
    """A bare session on an initialized database, without the HTTP layer."""
    from bucketkv.db import create_db_engine, init_db, make_sessionmaker

    engine = create_db_engine(db_path)
    init_db(engine)
    session = make_sessionmaker(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
