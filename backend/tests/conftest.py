"""Pytest fixtures: file-backed SQLite database, fresh for every test."""
import os

# The app's module-level engine must not point at the production database
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_app.db")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models.user import User, UserRole

# Import all models so they register with Base.metadata
from app.models.discussion import Discussion   # noqa: F401
from app.models.operation import Operation     # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # WAL lets readers proceed while a writer holds the lock
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    enable_sqlite_foreign_keys(engine)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: create records via the API and return the response JSON
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, name: str = "alice", role: str = "Registered") -> dict:
    """POST /api/users and return the response JSON."""
    resp = client.post("/api/users/", json={"username": name, "role": role})
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_discussion(client: TestClient, author_id: str, starting_number: float = 42) -> dict:
    """POST /api/discussions and return the response JSON."""
    resp = client.post("/api/discussions/", json={
        "starting_number": starting_number,
        "author_id": author_id,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_operation(client: TestClient, discussion_id: str, author_id: str,
                          operation_type: str = "ADD", operand: float = 10,
                          parent_id: str = None) -> dict:
    """POST /api/operations and return the response JSON."""
    resp = client.post("/api/operations/", json={
        "discussion_id": discussion_id,
        "parent_id": parent_id,
        "operation_type": operation_type,
        "operand": operand,
        "author_id": author_id,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def make_user(db, name: str = "alice", role: UserRole = UserRole.registered) -> User:
    """Insert a user directly for service-level tests."""
    user = User(username=name, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
