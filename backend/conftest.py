import os

# Must be set before config/database are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

import models  # noqa: F401
from database import Base, SessionLocal, engine


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    from main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(client):
    """Sign up + log in, returning the Authorization headers."""
    def _make(username="alice", password="s3cret-pass"):
        resp = client.post("/api/v1/auth/signup", json={"username": username, "password": password})
        assert resp.status_code == 201, resp.text
        resp = client.post("/api/v1/auth/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['data']['token']}"}
    return _make


@pytest.fixture
def auth_headers(make_user):
    return make_user()
