import os

# before any timeboard import: settings and the module engine read these
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import timeboard.models  # noqa: F401  registers every table on Base.metadata
from timeboard.db import get_db
from timeboard.main import create_app
from timeboard.models.base import Base

@pytest.fixture()
def engine():
    url = os.environ.get("TEST_DATABASE_URL", "sqlite://")
    if url.startswith("sqlite"):
        # one shared in-memory connection across threads
        eng = create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    else:
        eng = create_engine(url, pool_pre_ping=True)

    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(eng)
        eng.dispose()

@pytest.fixture()
def db_session(engine) -> Session:
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def _auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def _register(client, org_name: str) -> dict:
    email = f"owner+{uuid.uuid4().hex[:8]}@example.com"
    r = client.post(
        "/auth/register",
        json={
            "organization_name": org_name,
            "admin_name": "owner",
            "email": email,
            "password": "password123",
        },
    )
    assert r.status_code == 201, r.text
    return r.json()

@pytest.fixture()
def owner(client) -> dict:
    """Registered org owner: the /auth/register response body."""
    return _register(client, f"org-{uuid.uuid4().hex[:6]}")

@pytest.fixture()
def owner_jwt(owner) -> str:
    return owner["access_token"]

@pytest.fixture()
def project_id(client, owner_jwt) -> str:
    r = client.post("/projects", json={"name": "board", "code": "BRD"}, headers=_auth(owner_jwt))
    assert r.status_code == 201, r.text
    return r.json()["id"]
