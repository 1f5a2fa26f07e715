import os
import tempfile

# Settings are read at import time; point them at throwaway locations first.
os.environ.setdefault("DB_URL", "sqlite://")
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="staynest-uploads-")
os.environ["HEAD_INVITE_CODE"] = "let-me-in"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from staynest.app import app
from staynest.db import Base, get_db


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    Base.metadata.create_all(bind=engine)
    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session(client):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def signup(client, email, role="guest", **extra):
    body = {
        "email": email,
        "password": "secret123",
        "name": extra.pop("name", email.split("@")[0].title()),
        "mobile": extra.pop("mobile", "9876543210"),
        "role": role,
        "occupation": "student",
        "course": "B.Tech",
        "year": "2nd Year",
    }
    if role == "head":
        body["invite_code"] = "let-me-in"
    body.update(extra)
    return client.post("/auth/signup", json=body)


def login(client, email, password="secret123"):
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


def make_user(client, email, role="guest", **extra):
    r = signup(client, email, role=role, **extra)
    assert r.status_code == 201, r.text
    return r.json()["id"], login(client, email)


@pytest.fixture()
def head(client):
    return make_user(client, "head@pg.example.com", role="head", name="Asha Head")


@pytest.fixture()
def guest(client):
    return make_user(client, "ravi@pg.example.com", name="Ravi", room_number="101")


@pytest.fixture()
def other_guest(client):
    return make_user(client, "meena@pg.example.com", name="Meena", room_number="102")
